from pydantic import Field, ValidationError
import pytest

from kcengine.core.model import DataModel
from kcengine.core.result import Result


class Sample(DataModel):
    id: str
    attack_power: int = Field(alias="attackPower")


def test_result_success_and_failure():
    ok = Result.success(5)
    assert ok.ok
    assert ok.value_or(0) == 5

    failed = Result.failure("disk full")
    assert not failed.ok
    assert failed.reason == "disk full"
    assert failed.value_or(7) == 7

def test_data_model_aliases_and_extra_fields():
    # Data files use camelCase and may carry unknown fields
    sample = Sample.from_data({"id": "x", "attackPower": 3, "unused": True})
    assert sample.attack_power == 3
    assert sample.to_data() == {"id": "x", "attackPower": 3}

    # Attribute names are accepted too
    assert Sample(id="y", attack_power=1).attack_power == 1

def test_data_model_is_frozen():
    sample = Sample(id="x", attack_power=3)
    with pytest.raises(ValidationError):
        sample.attack_power = 4
