#!filepath: kfold_cv/cli.py
import json
from typing import List, Optional

import typer
import yaml
from rich import print

from kfold_cv import __version__, logs
from kfold_cv.config.app_config import AppConfig
from kfold_cv.utils.errors import PipelineFailure, PlatformRequestError, ValidationError

app = typer.Typer(help="k-fold cross-validation on the remote ML platform")


def parse_options(pairs: Optional[List[str]]) -> dict:
    """
    ["number_of_models=10", "randomize=true"] → {"number_of_models": 10, "randomize": True}
    Values are read as YAML scalars.
    """
    options = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}")
        options[key.strip()] = yaml.safe_load(value)
    return options


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
        dataset_id: str,
        k: Optional[int] = typer.Option(None, "--k", help="number of folds"),
        objective: Optional[str] = typer.Option(None, "--objective", help="objective field id"),
        model_option: Optional[List[str]] = typer.Option(None, "--model-option", help="KEY=VALUE"),
        evaluation_option: Optional[List[str]] = typer.Option(None, "--evaluation-option", help="KEY=VALUE"),
        config: Optional[str] = typer.Option(None, "--config", help="YAML config path"),
):
    """
    Run k-fold cross-validation and print the aggregate evaluation id.
    """
    from kfold_cv.workflows.cross_validation import run_cross_validation

    cfg = AppConfig.load(config)
    logs.reconfigure(cfg.log.dir, cfg.log.rotation, cfg.log.retention, cfg.log.level)

    try:
        result_id = run_cross_validation(
            dataset_id,
            k if k is not None else cfg.cross_validation.default_k_folds,
            objective,
            parse_options(model_option),
            parse_options(evaluation_option),
            cfg=cfg,
        )
    except (ValidationError, PipelineFailure, PlatformRequestError) as e:
        typer.echo(json.dumps(e.to_dict()))
        raise typer.Exit(code=1)

    print(f"[green]{result_id}[/green]")


if __name__ == "__main__":
    app()

# python -m kfold_cv.cli run dataset/5af06df94e17277501000010 --k 5
