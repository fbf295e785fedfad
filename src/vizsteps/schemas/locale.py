"""Localization bundles for progress messages and visualization names."""

from pydantic import BaseModel, ConfigDict, Field


class Messages(BaseModel):
    """Progress messages shown while a plan executes."""

    loading: str = "Loading Data"
    data: str = "Analyzing Data"
    ui: str = "Drawing UI"
    draw: str = "Drawing Visualization"
    initializing: str = "Initializing {0}"

    model_config = ConfigDict(frozen=True)


class Locale(BaseModel):
    """A complete localization bundle."""

    code: str = "en_US"
    message: Messages = Field(default_factory=Messages)
    visualization: dict[str, str] = Field(
        default_factory=lambda: {
            "network": "Network",
            "tree_map": "Tree Map",
        }
    )

    model_config = ConfigDict(frozen=True)

    def app_name(self, app_type: str | None) -> str:
        """Localized display name of an app type, falling back to its id."""
        if not app_type:
            return ""
        return self.visualization.get(app_type, app_type)


def string_format(template: str, *args: object) -> str:
    """Fill positional ``{0}``-style placeholders."""
    return template.format(*args)


LOCALES: dict[str, Locale] = {
    "en_US": Locale(),
    "es_ES": Locale(
        code="es_ES",
        message=Messages(
            loading="Cargando Datos",
            data="Analizando Datos",
            ui="Dibujando Interfaz",
            draw="Dibujando Visualización",
            initializing="Inicializando {0}",
        ),
        visualization={"network": "Red", "tree_map": "Mapa de Árbol"},
    ),
}
