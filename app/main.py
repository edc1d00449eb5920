import argparse
import sys
from pathlib import Path

from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.exceptions import WorkflowError
from app.processor.models import Artifact, UploadedFile
from app.processor.workflow import TivWorkflow, build_workflow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tivscan",
        description="Extract TIV data from a scanned PDF and produce the filled Word, PDF and QR-stamped PDF.",
    )
    parser.add_argument("source", type=Path, help="Scanned TIV PDF")
    parser.add_argument("template", type=Path, help="Word template (.docx) with «Field» markers")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Override a recognized field before generating documents (repeatable)",
    )
    return parser.parse_args(argv)


def parse_override(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"Invalid override '{raw}', expected FIELD=VALUE")
    return name.strip(), value


def run(workflow: TivWorkflow, args: argparse.Namespace, out_dir: Path) -> list[Path]:
    """Drive the workflow end to end and write the three artifacts."""
    workflow.load_source(_upload(args.source))
    workflow.load_template(_upload(args.template))
    workflow.recognize()
    for raw in args.overrides:
        name, value = parse_override(raw)
        workflow.update_field(name, value)
        Log.info(f"Field '{name}' overridden")

    written = [_write(out_dir, workflow.fill_template().artifact)]
    written.append(_write(out_dir, workflow.render_document().artifact))
    final = workflow.embed_code()
    written.append(_write(out_dir, final.artifact))
    if final.advisory:
        print(final.advisory)
    return written


def main(argv: list[str] | None = None) -> int:
    """Entry point: configure logging -> build workflow -> run all stages."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    out_dir = args.out if args.out is not None else Path(settings.output_dir)

    try:
        workflow = build_workflow(settings)
        written = run(workflow, args, out_dir)
    except (WorkflowError, FileNotFoundError, ValueError) as exc:
        Log.error(f"tivscan failed: {exc}")
        return 1

    for path in written:
        print(path)
    return 0


def _upload(path: Path) -> UploadedFile:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return UploadedFile(filename=path.name, data=path.read_bytes())


def _write(out_dir: Path, artifact: Artifact) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / artifact.filename
    path.write_bytes(artifact.data)
    Log.info(f"Wrote {path}")
    return path


if __name__ == "__main__":
    sys.exit(main())
