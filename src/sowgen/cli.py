import argparse
import logging
import sys
from pathlib import Path

from sowgen.core.assembler import section_blocks
from sowgen.core.config import load_project
from sowgen.core.engine import CoreEngine
from sowgen.core.errors import SowGenError
from sowgen.core.prompts import populate_prompt_template
from sowgen.core.signature import company_markers
from sowgen.i18n.i18n import i18n


def _report(key: str, source: Path, e: Exception) -> int:
    print(i18n.t(key, file=source.name, err=str(e)), file=sys.stderr)
    for problem in getattr(e, "problems", []):
        print(i18n.t("log_config_problem", problem=problem), file=sys.stderr)
    return 1


def export_cmd(args: argparse.Namespace) -> int:
    i18n.set_locale(args.lang)
    project = Path(args.project)
    out_dir = Path(args.output_dir) if args.output_dir else project.parent
    out_ext = args.format if args.format.startswith(".") else f".{args.format}"

    print(f"{i18n.t('log_start')}: {project.name}")
    try:
        config, sections = load_project(str(project), strict=args.strict)
        target = CoreEngine.export_to_file(config, sections, str(out_dir), out_ext)
    except SowGenError as e:
        return _report("log_fail", project, e)

    print(i18n.t("log_success", file=target.name))
    return 0


def blocks_cmd(args: argparse.Namespace) -> int:
    project = Path(args.project)
    try:
        config, sections = load_project(str(project), strict=False)
    except SowGenError as e:
        return _report("log_read_fail", project, e)

    markers = company_markers([config.your_company.name, config.client_company.name])
    shown = 0
    for section in sections:
        if args.section and section.id != args.section:
            continue
        if not args.section and not section.status.is_exportable:
            continue
        shown += 1
        print(f"== {section.title} [{section.status.value}]")
        for block in section_blocks(section.content, markers):
            print(f"  {block!r}")
    if not shown:
        print(i18n.t("no_sections"), file=sys.stderr)
        return 1
    return 0


def prompt_cmd(args: argparse.Namespace) -> int:
    project = Path(args.project)
    template_path = Path(args.template)
    try:
        config, _ = load_project(str(project), strict=False)
    except SowGenError as e:
        return _report("log_read_fail", project, e)
    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as e:
        return _report("log_read_fail", template_path, e)
    print(populate_prompt_template(template, config, args.section))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Statement of Work exporter")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export a project file to DOCX or Markdown")
    export_parser.add_argument("project", help="Project JSON file")
    export_parser.add_argument("--format", default="docx", choices=["docx", "md"])
    export_parser.add_argument("--output-dir", default="", help="Output directory")
    export_parser.add_argument("--lang", default="en-US", help="Language for labels and logs")
    export_parser.add_argument("--no-strict", action="store_false", dest="strict",
                               help="Export even when the configuration is incomplete")

    blocks_parser = subparsers.add_parser("blocks", help="Show parsed blocks per section")
    blocks_parser.add_argument("project", help="Project JSON file")
    blocks_parser.add_argument("--section", default="", help="Only the section with this id")

    prompt_parser = subparsers.add_parser("prompt", help="Fill a prompt template from the project configuration")
    prompt_parser.add_argument("project", help="Project JSON file")
    prompt_parser.add_argument("--template", required=True, help="Template file")
    prompt_parser.add_argument("--section", default="", help="Section title")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "export":
        code = export_cmd(args)
    elif args.command == "blocks":
        code = blocks_cmd(args)
    else:
        code = prompt_cmd(args)
    sys.exit(code)

if __name__ == "__main__":
    main()
