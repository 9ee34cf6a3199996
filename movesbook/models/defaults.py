import enum

from sqlalchemy import Column, JSON, String

from movesbook.db.base_class import Base


class DefaultsKind(str, enum.Enum):
    COLORS = "colors"
    FAVOURITES = "favourites"
    TOOLS = "tools"


class LanguageDefaultsMixin:
    """Per-language configuration blob; one row per language code."""

    language = Column(String(16), unique=True, index=True, nullable=False)
    data = Column(JSON, nullable=False)


class ColorDefaults(LanguageDefaultsMixin, Base):
    __tablename__ = "color_defaults"
    label = "Color"


class FavouritesDefaults(LanguageDefaultsMixin, Base):
    __tablename__ = "favourites_defaults"
    label = "Favourites"


class ToolsDefaults(LanguageDefaultsMixin, Base):
    __tablename__ = "tools_defaults"
    label = "Tools"


DEFAULTS_MODELS = {
    DefaultsKind.COLORS: ColorDefaults,
    DefaultsKind.FAVOURITES: FavouritesDefaults,
    DefaultsKind.TOOLS: ToolsDefaults,
}
