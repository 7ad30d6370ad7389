"""file-agent CLI.

    file-agent <prompt_file>                  single chat completion, no tools
    file-agent <prompt_file> <project_root>   tool-calling agent over project_root

Every failure prints one ``Error: ...`` line and exits with status 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import click
from pydantic import ValidationError as SettingsInvalid

from file_agent.config.settings import load_settings
from file_agent.domain.exceptions import BusinessError
from file_agent.flows.graph import NO_RESPONSE
from file_agent.infrastructure.logging.logger import configure_logging
from file_agent.tasks import task_runner

USAGE = "Usage: file-agent <path_to_prompt_file> [<project_root>]"


def _fail(message: str) -> NoReturn:
    click.echo(message)
    raise SystemExit(1)


@click.command()
@click.argument("prompt_file", required=False)
@click.argument("project_root", required=False)
@click.option("--model", "model_name", default=None, help="Logical or provider model name.")
@click.option("--max-steps", type=int, default=None, help="Maximum completion requests per run.")
@click.option("--temperature", type=float, default=None, help="Sampling temperature; omitted when unset.")
def main(
    prompt_file: Optional[str],
    project_root: Optional[str],
    model_name: Optional[str],
    max_steps: Optional[int],
    temperature: Optional[float],
) -> None:
    """Send PROMPT_FILE to the model; with PROJECT_ROOT, let it work on that directory."""
    if not prompt_file:
        _fail(USAGE)

    path = Path(prompt_file)
    if not path.is_file():
        _fail(f"Error: File not found at {prompt_file}")
    try:
        prompt = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Error: Cannot read prompt file {prompt_file}: {e}")
    if not prompt:
        _fail("Error: Prompt file is empty")

    try:
        settings = load_settings(max_steps=max_steps, temperature=temperature)
    except SettingsInvalid as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        _fail(f"Error: invalid configuration: {problems}")
    if not settings.openai_api_key:
        _fail("Error: OPENAI_API_KEY environment variable not set")

    if project_root is not None and not Path(project_root).is_dir():
        _fail(f"Error: Project root is not a directory: {project_root}")

    configure_logging(settings)
    try:
        if project_root is None:
            answer = task_runner.run_chat(prompt, settings, model_name=model_name)
            click.echo(NO_RESPONSE if answer is None else answer)
        else:
            job = task_runner.build_job(prompt, project_root, settings, model_name=model_name)
            outcome = task_runner.run_job(job, settings, echo=click.echo)
            click.echo(f"Job complete after {outcome.steps} completion(s)")
    except SystemExit:
        raise
    except BusinessError as e:
        _fail(f"Error: {e.message}")
    except Exception as e:
        _fail(f"Error: {e}")
