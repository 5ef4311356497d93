from __future__ import annotations

import pytest

from kfold_cv.core.types import DatasetRef, Field
from kfold_cv.engines.validation_engine import ValidationEngine
from kfold_cv.utils.errors import (
    InvalidArgument,
    ObjectiveNotSelectable,
    OutOfRange,
    ValidationError,
    WrongResourceKind,
)


def _dataset(objective_field=None) -> DatasetRef:
    fields = {
        "000000": Field("000000", "x", "numeric", True),
        "000001": Field("000001", "notes", "text", False),
        "000002": Field("000002", "f", "categorical", True),
        "000003": Field("000003", "hidden", "numeric", False),
    }
    return DatasetRef(id="dataset/abc", name="D", fields=fields, objective_field=objective_field)


# --------------------------------------------------
# resource refs
# --------------------------------------------------
def test_non_string_ref_is_101():
    with pytest.raises(InvalidArgument) as exc:
        ValidationEngine.validate_resource_ref(42, "dataset")
    assert exc.value.code == 101


@pytest.mark.parametrize("ref", ["", "dataset", "dataset/", "/abc", "dataset/a/b"])
def test_malformed_ref_is_101(ref):
    with pytest.raises(InvalidArgument) as exc:
        ValidationEngine.validate_resource_ref(ref, "dataset")
    assert exc.value.code == 101


def test_model_ref_where_dataset_expected_is_102():
    with pytest.raises(WrongResourceKind) as exc:
        ValidationEngine.validate_resource_ref("model/5af06df94e17277501000010", "dataset")
    assert exc.value.code == 102


def test_valid_ref_is_parsed():
    ref = ValidationEngine.validate_resource_ref("dataset/5af06df9", "dataset")
    assert ref.kind == "dataset"
    assert ref.key == "5af06df9"
    assert ref.id == "dataset/5af06df9"


# --------------------------------------------------
# fold count
# --------------------------------------------------
@pytest.mark.parametrize("k", ["3", 3.0, None, True])
def test_non_integer_k_is_103(k):
    with pytest.raises(InvalidArgument) as exc:
        ValidationEngine.validate_fold_count(k)
    assert exc.value.code == 103


@pytest.mark.parametrize("k", [1, 0, -4])
def test_k_below_two_is_104(k):
    with pytest.raises(OutOfRange) as exc:
        ValidationEngine.validate_fold_count(k)
    assert exc.value.code == 104


def test_k_two_is_accepted():
    assert ValidationEngine.validate_fold_count(2) == 2


# --------------------------------------------------
# objective field
# --------------------------------------------------
def test_text_non_preferred_objective_is_106():
    with pytest.raises(ObjectiveNotSelectable) as exc:
        ValidationEngine.validate_objective_field("000001", _dataset())
    assert exc.value.code == 106


def test_non_preferred_numeric_objective_is_106():
    with pytest.raises(ObjectiveNotSelectable):
        ValidationEngine.validate_objective_field("000003", _dataset())


def test_unknown_objective_is_106():
    with pytest.raises(ObjectiveNotSelectable):
        ValidationEngine.validate_objective_field("00000f", _dataset())


def test_selectable_objective_returns_name():
    assert ValidationEngine.validate_objective_field("000002", _dataset()) == "f"


def test_resolve_objective_prefers_explicit_then_declared_then_last_selectable():
    ds = _dataset(objective_field="000000")
    assert ValidationEngine.resolve_objective_id(ds, "000002") == "000002"
    assert ValidationEngine.resolve_objective_id(ds) == "000000"
    assert ValidationEngine.resolve_objective_id(_dataset()) == "000002"


def test_resolve_objective_without_selectable_fields_is_106():
    ds = DatasetRef(id="dataset/abc", name="D", fields={"000000": Field("000000", "t", "text", True)})
    with pytest.raises(ObjectiveNotSelectable):
        ValidationEngine.resolve_objective_id(ds)


def test_validation_error_to_dict():
    err = OutOfRange("too few folds")
    assert isinstance(err, ValidationError)
    assert err.to_dict() == {"code": 104, "message": "too few folds"}
