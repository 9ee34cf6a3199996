import pytest

from movesbook.db.base_class import Base
from movesbook.models import (
    ColorDefaults,
    FavouritesDefaults,
    Moveframe,
    Movelap,
    ToolsDefaults,
    User,
    WorkoutDay,
    WorkoutPlan,
    WorkoutSession,
    WorkoutWeek,
)

ALL_MODELS = [
    User,
    WorkoutPlan,
    WorkoutWeek,
    WorkoutDay,
    WorkoutSession,
    Moveframe,
    Movelap,
    ColorDefaults,
    FavouritesDefaults,
    ToolsDefaults,
]


@pytest.mark.parametrize("model", ALL_MODELS, ids=lambda model: model.__name__)
def test_every_model_inherits_id_and_timestamps(model):
    columns = model.__table__.columns

    assert columns["id"].primary_key
    assert columns["id"].type.length == 36
    assert "created_at" in columns
    assert "updated_at" in columns


def test_all_tables_registered_on_metadata():
    assert set(Base.metadata.tables) == {model.__tablename__ for model in ALL_MODELS}
