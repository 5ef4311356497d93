from __future__ import annotations

import pytest

from kfold_cv.config.app_config import AppConfig
from kfold_cv.config.cross_validation_config import CrossValidationConfig
from kfold_cv.workflows.cross_validation import run_cross_validation
from kfold_cv.utils.errors import InvalidArgument, ObjectiveNotSelectable, OutOfRange


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig()


def test_end_to_end_five_folds(platform, dataset_id, cfg):
    result_id = run_cross_validation(dataset_id, 5, adapter=platform, cfg=cfg)

    folds = platform.created_of("dataset")
    assert [b["new_fields"][0]["field"] for b in folds] == ["0", "1", "2", "3", "4"]

    fold_ids = [rid for rid, r in platform.resources.items()
                if rid.startswith("dataset/") and r.get("request", {}).get("origin_dataset") == dataset_id]
    assert len(fold_ids) == 5
    for i, fid in enumerate(fold_ids):
        rows = platform.resources[fid]["data"]
        assert len(rows) == 2
        assert all(r["k_fold"] == str(i) for r in rows)

    assert len(platform.created_of("model")) == 5

    evaluations = platform.created_of("evaluation")
    assert [e["name"] for e in evaluations[:5]] == [
        "1-fold Evaluation D",
        "2-fold Evaluation D",
        "3-fold Evaluation D",
        "4-fold Evaluation D",
        "5-fold Evaluation D",
    ]

    aggregate = platform.resources[result_id]["request"]
    evaluation_ids = [rid for rid, r in platform.resources.items()
                      if rid.startswith("evaluation/") and "name" in r.get("request", {})]
    assert aggregate == {"evaluations": evaluation_ids}


def test_ensemble_run(platform, dataset_id, cfg):
    run_cross_validation(
        dataset_id,
        3,
        model_options={"number_of_models": 2, "sample_rate": 0.9},
        evaluation_options={"combiner": 0},
        adapter=platform,
        cfg=cfg,
    )

    assert platform.created_of("model") == []
    assert len(platform.created_of("ensemble")) == 3
    assert all("ensemble" in e for e in platform.created_of("evaluation")[:3])
    assert all(e["combiner"] == 0 for e in platform.created_of("evaluation")[:3])


def test_missing_k_is_103_even_with_a_config_default(platform, dataset_id):
    cfg = AppConfig(cross_validation=CrossValidationConfig(default_k_folds=2))

    with pytest.raises(InvalidArgument) as exc:
        run_cross_validation(dataset_id, None, adapter=platform, cfg=cfg)
    assert exc.value.code == 103
    assert platform.created == []


@pytest.mark.parametrize("number_of_models", ["2", "abc"])
def test_non_integer_model_count_is_103_before_any_creation(platform, dataset_id, cfg, number_of_models):
    with pytest.raises(InvalidArgument) as exc:
        run_cross_validation(
            dataset_id, 3, model_options={"number_of_models": number_of_models}, adapter=platform, cfg=cfg
        )
    assert exc.value.code == 103
    assert platform.created == []


@pytest.mark.parametrize(
    "dataset,k,objective,code",
    [
        (42, 3, None, 101),
        ("dataset/abc", "3", None, 103),
        ("dataset/abc", 1, None, 104),
    ],
)
def test_validation_codes(platform, cfg, dataset, k, objective, code):
    with pytest.raises((InvalidArgument, OutOfRange)) as exc:
        run_cross_validation(dataset, k, objective, adapter=platform, cfg=cfg)
    assert exc.value.code == code
    assert platform.created == []


def test_text_objective_is_106(platform, dataset_id, cfg):
    with pytest.raises(ObjectiveNotSelectable) as exc:
        run_cross_validation(dataset_id, 3, "000001", adapter=platform, cfg=cfg)
    assert exc.value.to_dict()["code"] == 106
