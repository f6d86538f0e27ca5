"""Configuration models for Quick Class Selector."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator

from quickclass.models.class_entry import ClassEntry


DEFAULT_STORE_PATH = Path.home() / ".local" / "share" / "quickclass" / "classes.json"


class BackendConfig(BaseModel):
    """Where the class list is persisted."""

    kind: Literal["file", "ajax"] = Field(
        default="file",
        description="'file' for a local JSON store, 'ajax' for a WordPress admin-ajax endpoint"
    )

    path: Path = Field(
        default=DEFAULT_STORE_PATH,
        description="JSON file used by the file backend"
    )

    ajax_url: Optional[HttpUrl] = Field(
        default=None,
        description="admin-ajax.php URL used by the ajax backend"
    )

    nonce: str = Field(
        default="",
        description="Nonce sent with every ajax request"
    )

    cookies: dict[str, str] = Field(
        default_factory=dict,
        description="Session cookies for the ajax backend (logged-in admin)"
    )

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand ~ in the store path."""
        return Path(v).expanduser()

    @model_validator(mode="after")
    def check_ajax_url(self) -> "BackendConfig":
        """The ajax backend cannot work without an endpoint."""
        if self.kind == "ajax" and self.ajax_url is None:
            raise ValueError(
                "backend.ajax_url is required when backend.kind is 'ajax'\n"
                "Example: https://example.com/wp-admin/admin-ajax.php"
            )
        return self

    model_config = {"frozen": True}


class UIConfig(BaseModel):
    """Terminal UI behaviour."""

    page_size: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Rows per page in the class manager"
    )

    status_timeout: float = Field(
        default=2.0,
        ge=0.0,
        description="Seconds before a save/import status message is dismissed"
    )

    model_config = {"frozen": True}


class UIStrings(BaseModel):
    """Localized strings shown by the class manager and the selector.

    Defaults are the Dutch strings the plugin ships with. Strings containing
    ``{count}`` are formatted with a number.
    """

    title: str = "Quick Class Selector"
    manager_intro: str = (
        "Beheer hier je voorgedefinieerde CSS classes. Deze classes verschijnen "
        "als multi-select opties in de editor."
    )
    class_placeholder: str = "class-naam"
    description_placeholder: str = "Optionele beschrijving..."
    add_class: str = "Nieuwe class toevoegen"
    save: str = "Opslaan"
    import_classes: str = "Importeren"
    import_help: str = "Eén class per regel: class<TAB>beschrijving (ook | ; of , als scheiding)"
    confirm_delete: str = "Weet je zeker dat je deze class wilt verwijderen?"
    confirm: str = "Ja"
    cancel: str = "Annuleren"
    saved: str = "Opgeslagen!"
    error: str = "Er is een fout opgetreden."
    page_indicator: str = "Pagina {page} van {total}"
    selector_label: str = "Quick Classes"
    selector_placeholder: str = "Selecteer classes..."
    selected_one: str = "{count} class geselecteerd"
    selected_many: str = "{count} classes geselecteerd"
    search_placeholder: str = "Zoeken..."
    clear_all: str = "Alles wissen"
    no_classes: str = "Er zijn nog geen classes gedefinieerd."

    model_config = {"frozen": True}


class EditorSettings(BaseModel):
    """Startup parameters handed to the store and the selector.

    Carries the predefined class list and the localized strings explicitly
    instead of through a global.
    """

    classes: list[ClassEntry] = Field(
        default_factory=list,
        description="Predefined classes, in display order"
    )

    strings: UIStrings = Field(default_factory=UIStrings)

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for Quick Class Selector."""

    backend: BackendConfig = Field(default_factory=BackendConfig, description="Persistence settings")
    ui: UIConfig = Field(default_factory=UIConfig, description="Terminal UI settings")
    strings: UIStrings = Field(default_factory=UIStrings, description="Localized UI strings")

    model_config = {"frozen": True}
