"""Planner core: step planning, app type registry and shared names.

- planner.py: build_plan and the color-type/color-scale rules
- registry.py: AppType descriptors and their registry
- color_key.py: color encoding -> data key resolution
"""
