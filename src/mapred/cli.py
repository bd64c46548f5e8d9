# cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from mapred import settings
from mapred.loader import load_job
from mapred.schema import validate_document
from mapred.ui.console import Console, set_console, get_console


def discover_job_file(job_arg: str | None) -> Path:
    """
    Resolve the job file from the argument or the configured default.

    Raises:
        SystemExit: If the job file cannot be found
    """
    console = get_console()

    job_path = Path(job_arg or settings.JOB_FILE)
    if not job_path.exists() and job_path.suffix != ".py":
        job_path = Path(str(job_path) + ".py")
    if not job_path.exists():
        console.print_error(
            "Job file not found",
            f"Could not find job file: {job_arg or settings.JOB_FILE}",
            suggestion=(
                "Create a job file defining job() or JOB, or specify one:\n"
                "  mapred render --job my_job.py"
            ),
        )
        sys.exit(1)
    return job_path


def _validation_details(e: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()]


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """mapred: build map-reduce job documents for a Riak-style key-value store."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--job", "job_file", default=None, help="Job file path (defaults to $MAPRED_JOB_FILE or mapred_job.py)")
@click.option("--indent", default=None, type=int, help="JSON indentation (defaults to $MAPRED_JSON_INDENT)")
@click.option("--compact", is_flag=True, default=False, help="Render on a single line")
@click.option("--check/--no-check", default=True, show_default=True, help="Check the document against the wire schema")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.pass_context
def render(ctx, job_file, indent, compact, check, output):
    """Render a job file to the JSON document the map-reduce endpoint expects."""
    console = get_console()

    job_path = discover_job_file(job_file)

    try:
        job = load_job(job_path)
        console.print_job_loaded(
            str(job_path),
            job.inputs,
            [phase.kind for phase in job.phases],
        )

        doc = job.to_dict()
        if check:
            validate_document(doc)
            console.print_debug("document matches the wire schema")

        if compact:
            text = json.dumps(doc, separators=(",", ":"))
        else:
            text = json.dumps(doc, indent=settings.JSON_INDENT if indent is None else indent)

        if output:
            Path(output).write_text(text + "\n", encoding="utf-8")
            console.print_debug(f"wrote {output}")
        else:
            console.print_document(text)

    except ValidationError as e:
        console.print_error(
            "Invalid document",
            f"{job_path} rendered a document the endpoint would reject.",
            details=_validation_details(e),
        )
        sys.exit(1)
    except Exception as e:
        console.print_error(
            "Failed to render job",
            f"Could not render job from {job_path}",
        )
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("document", type=click.File("r"))
@click.pass_context
def check(ctx, document):
    """Check an existing JSON document against the wire schema."""
    console = get_console()

    try:
        doc = json.load(document)
    except json.JSONDecodeError as e:
        console.print_error(
            "Invalid JSON",
            f"Could not parse {document.name}.",
            details=[str(e)],
        )
        sys.exit(1)

    try:
        parsed = validate_document(doc)
    except ValidationError as e:
        console.print_error(
            "Invalid document",
            f"{document.name} does not match the map-reduce wire schema.",
            details=_validation_details(e),
        )
        sys.exit(1)

    console.print_check_ok(document.name, len(parsed.query))


if __name__ == "__main__":
    cli()
