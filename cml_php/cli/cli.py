from pathlib import Path
import click

from datetime import date
from rich import pretty
from rich.console import Console
from rich.markup import escape

from cml_php.api.gen_logging import configure_gen_logging
from cml_php.api.generator import generate_php, write_generated_files
from cml_php.config import PRESET_CONFIGS, build_config, load_config
from cml_php.errors import CMLError
from cml_php.language import CML_SUFFIX, build_model, count_units
from cml_php.lib.model import UnitKind
from cml_php.utils import model_summary, print_model_debug

pretty.install()
console = Console()


def _today() -> str:
    return date.today().strftime('%Y-%m-%d')


def validate_generated_files(result) -> list:
    """
    Structural smoke checks on generated files.

    Returns a list of error messages (empty when everything looks right).
    """
    errors = []
    if len(result) == 0:
        errors.append("No PHP files generated")
    for f in result:
        if not f.content or not f.content.strip():
            errors.append(f"Generated file {f.filename} is empty")
            continue
        if not f.content.startswith("<?php"):
            errors.append(f"Generated file {f.filename} missing PHP opening tag")
        if f.kind is UnitKind.ENUM:
            if "case " not in f.content:
                errors.append(f"Generated enum file {f.filename} has no enum cases (empty enum)")
            if ": string" not in f.content:
                errors.append(f"Generated enum file {f.filename} is not a string-backed enum")
    return errors


@click.group()
@click.pass_context
def cli(context):
    context.ensure_object(dict)


@cli.command("inspect", help="Parse a CML file and print a summary of the model.")
@click.pass_context
@click.argument("model_path")
def inspect_cmd(context, model_path):
    try:
        model = build_model(model_path)
        console.print(f"[{_today()}] Model parsed: {count_units(model)} unit(s)", style='green')
        print_model_debug(model)
    except (CMLError, OSError) as e:
        console.print(f"[{_today()}] Inspect failed with error(s): {escape(str(e))}", style='red')
        context.exit(1)
    else:
        context.exit(0)


@cli.command("generate", help="Generate PHP classes from a CML file.")
@click.pass_context
@click.argument("model_path")
@click.option("--out", "out_dir", default="generated", help="Output directory (default: ./generated)")
@click.option("--config", "config_path", default=None, help="YAML file with generator options.")
@click.option("--framework", type=click.Choice(["plain", "laravel", "doctrine"], case_sensitive=False), default=None)
@click.option("--namespace", default=None, help="Root namespace (default: App\\Models)")
@click.option(
    "--directory-structure",
    type=click.Choice(["flat", "bounded-context", "aggregate", "psr-4"], case_sensitive=False),
    default=None,
)
@click.option("--php-version", type=click.Choice(["8.1", "8.2", "8.3", "8.4"]), default=None)
@click.option("--constructor-type", type=click.Choice(["none", "required", "all"], case_sensitive=False), default=None)
@click.option("--promotion/--no-promotion", "constructor_property_promotion", default=None,
              help="Use constructor property promotion.")
@click.option("--public-properties/--private-properties", default=None)
@click.option("--group-by-type/--no-group-by-type", default=None,
              help="Put enums, value objects and entities in separate folders.")
@click.option("--readonly-value-objects/--mutable-value-objects", default=None)
@click.option("--dry-run", is_flag=True, help="List the files that would be written.")
@click.option("-v", "--verbose", is_flag=True, help="Debug output.")
@click.option("-q", "--quiet", is_flag=True, help="Warnings and errors only.")
def generate(context, model_path, out_dir, config_path, framework, namespace, directory_structure,
             php_version, constructor_type, constructor_property_promotion, public_properties,
             group_by_type, readonly_value_objects, dry_run, verbose, quiet):
    configure_gen_logging(verbose=verbose, quiet=quiet)
    overrides = dict(
        framework=framework.lower() if framework else None,
        namespace=namespace,
        directory_structure=directory_structure.lower() if directory_structure else None,
        php_version=php_version,
        constructor_type=constructor_type.lower() if constructor_type else None,
        constructor_property_promotion=constructor_property_promotion,
        public_properties=public_properties,
        group_by_type=group_by_type,
        readonly_value_objects=readonly_value_objects,
    )
    try:
        if config_path:
            config = load_config(config_path, **overrides)
        else:
            config = build_config(None, **overrides)

        model = build_model(model_path)
        result = generate_php(model, config)

        # details were already logged by the generator
        if result.warnings:
            console.print(f"[{_today()}] {len(result.warnings)} path rule(s) ignored.", style="yellow")
        if result.collisions and config.on_path_collision == "warn":
            console.print(f"[{_today()}] {len(result.collisions)} output path collision(s).", style="yellow")

        if dry_run:
            for f in result:
                console.print(f"  {f.path}")
            console.print(f"[{_today()}] {len(result)} file(s) would be written.", style="green")
        else:
            out_path = Path(out_dir).resolve()
            written = write_generated_files(result, out_path)
            console.print(f"[{_today()}] {len(written)} PHP file(s) emitted to: {out_path}", style="green")
    except (CMLError, OSError) as e:
        console.print(f"[{_today()}] Generation failed with error(s): {escape(str(e))}", style="red")
        context.exit(1)
    else:
        context.exit(0)


@cli.command("check", help="Run every *.cml file in a directory through preset configurations.")
@click.pass_context
@click.argument("examples_dir")
def check_cmd(context, examples_dir):
    configure_gen_logging(quiet=True)
    directory = Path(examples_dir)
    cml_files = sorted(directory.glob(f"*{CML_SUFFIX}")) if directory.is_dir() else []
    if not cml_files:
        console.print(f"[{_today()}] No CML files found in {directory}", style="red")
        context.exit(1)

    console.print(f"Found {len(cml_files)} CML file(s) to check\n")
    failed_files = 0
    total_configs = 0
    failed_configs = 0

    for cml_file in cml_files:
        console.print(f"[bold]{cml_file.name}[/bold]")
        try:
            model = build_model(str(cml_file))
        except (CMLError, OSError) as e:
            console.print(f"   ✗ Parse error: {escape(str(e))}", style="red")
            failed_files += 1
            continue

        counts = model_summary(model)
        console.print(
            f"   - Aggregates: {counts['aggregates']}  Entities: {counts['entities']}  "
            f"Value Objects: {counts['value_objects']}  Enums: {counts['enums']}"
        )

        file_ok = False
        for config in PRESET_CONFIGS:
            total_configs += 1
            try:
                result = generate_php(model, config)
                errors = validate_generated_files(result)
            except CMLError as e:
                errors = [str(e)]

            if errors:
                failed_configs += 1
                console.print(f"   ✗ {config.describe()}: {escape(errors[0])}", style="red")
            else:
                file_ok = True
                chars = sum(len(f.content) for f in result)
                console.print(f"   ✓ {config.describe()}: {len(result)} file(s), {chars} chars", style="green")

        if not file_ok:
            failed_files += 1

    console.print(
        f"\nFiles: {len(cml_files)}  failed: {failed_files}  |  "
        f"Configurations: {total_configs}  failed: {failed_configs}"
    )
    context.exit(1 if failed_configs else 0)


def main():
    cli()


if __name__ == "__main__":
    main()
