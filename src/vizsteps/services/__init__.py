"""Services package for plan execution and its collaborators.

This package contains:
- executor.py: StepExecutor for running plans in order
- engine.py: DrawEngine tying planner, executor and state together
- collaborators.py: the injectable bundle of step collaborators
- data.py, parse.py, color.py: data loading and analysis
- layout.py, scene.py, shapes.py, focus.py, tooltip.py: layout and drawing
- validation.py: configuration consistency checks
"""
