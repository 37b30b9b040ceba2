"""Command-line interface for treefitter."""

import json
import click
from pathlib import Path
from typing import Any, Optional
from .adapters import ObjectAdapter
from .config import Configuration, LogLevel, configure_logging
from .engines import FormatAwareOperations, TransformationEngine
from .models import Message, Node, create_message
from .profiler import OperationProfiler
from .registry import FormatRegistry
from .types import FormatType, TreeFitterError

FORMAT_CHOICE = click.Choice([f.value for f in FormatType], case_sensitive=False)


def _load_tree(input_file: Path, format: FormatType, adapter: ObjectAdapter) -> Node:
    """Read a JSON document and build a tree following ``format``'s conventions."""
    data = json.loads(input_file.read_text(encoding='utf-8'))
    if format == FormatType.CSV:
        if not isinstance(data, list):
            raise ValueError("CSV input must be a JSON array of row objects")
        return adapter.csv_from_rows(data)
    return adapter.from_object(data)


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _fail(error: Exception) -> None:
    click.echo(f"❌ Error: {error}", err=True)
    raise SystemExit(1)


def _load_config(config_file: Optional[Path], verbose: bool) -> Configuration:
    """Read a JSON configuration file, then apply the --verbose override."""
    config = Configuration(log_level=LogLevel.WARNING)
    if config_file is not None:
        config = Configuration.from_dict(json.loads(config_file.read_text(encoding='utf-8')))
    if verbose:
        config = config.merged({"log_level": LogLevel.DEBUG})
    return config


@click.group()
@click.version_option(version="1.0.0")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON configuration file (logLevel, enableSemanticTransforms, defaultFormat)')
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: Optional[Path]):
    """treefitter - Convert and query format-neutral trees."""
    try:
        config = _load_config(config_file, verbose)
    except (TreeFitterError, ValueError, OSError) as e:
        _fail(e)
        return
    configure_logging(config)
    ctx.obj = config


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--from', 'source', type=FORMAT_CHOICE, help='Source format (default: configured default format)')
@click.option('--to', 'target', type=FORMAT_CHOICE, required=True, help='Target format')
@click.option('--profile', is_flag=True, help='Print a performance summary')
@click.pass_obj
def convert(config: Configuration, input_file: Path, source: Optional[str], target: str, profile: bool):
    """Convert a JSON document's tree from one format's conventions to another's."""
    profiler = OperationProfiler() if profile else None
    engine = TransformationEngine(FormatRegistry.with_builtin_formats(), config=config, profiler=profiler)
    try:
        source_format = FormatType(source) if source else config.default_format
        target_format = FormatType(target)
        tree = _load_tree(input_file, source_format, ObjectAdapter())
        if not engine.is_compatible(source_format, target_format):
            click.echo(f"⚠️  {source_format.value} -> {target} cannot represent every core role", err=True)
        _emit(engine.convert(tree, source_format, target_format).to_dict())
    except (TreeFitterError, ValueError, OSError) as e:
        _fail(e)
    if profiler is not None:
        click.echo(profiler.format_summary(), err=True)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--format', '-f', 'format_name', type=FORMAT_CHOICE, help='Input format (default: configured default format)')
@click.option('--where', 'where', help='Keep items whose KEY equals VALUE, as KEY=VALUE')
@click.option('--skip', type=click.IntRange(min=0), default=0, help='Items to skip')
@click.option('--take', type=click.IntRange(min=0), default=None, help='Items to keep')
@click.option('--count', 'count_only', is_flag=True, help='Print the item count only')
@click.pass_obj
def query(config: Configuration, input_file: Path, format_name: Optional[str], where: Optional[str], skip: int,
          take: Optional[int], count_only: bool):
    """Filter and slice the items of a JSON document."""
    operations = FormatAwareOperations(TransformationEngine(FormatRegistry.with_builtin_formats(), config=config))
    try:
        format = FormatType(format_name) if format_name else config.default_format
        message: Message = create_message(_load_tree(input_file, format, ObjectAdapter()))
        builder = operations.query(message, format)
        if where:
            key, sep, expected = where.partition('=')
            if not sep:
                raise ValueError("--where expects KEY=VALUE")
            builder.filter(lambda item: str(operations.extract_value(item, key, format)) == expected)
        if skip:
            builder.skip(skip)
        if take is not None:
            builder.take(take)
        if count_only:
            click.echo(builder.count())
        else:
            _emit(builder.execute().data.to_dict())
    except (TreeFitterError, ValueError, OSError) as e:
        _fail(e)


@main.command()
def formats():
    """List the registered formats."""
    registry = FormatRegistry.with_builtin_formats()
    for format in sorted(registry.supported_formats(), key=lambda f: f.value):
        semantics = registry.lookup(format)
        click.echo(f"{format.value:<8} {semantics.description}")


@main.command()
@click.argument('source', type=FORMAT_CHOICE)
@click.argument('target', type=FORMAT_CHOICE)
def compat(source: str, target: str):
    """Check whether TARGET can represent the core roles of SOURCE."""
    engine = TransformationEngine(FormatRegistry.with_builtin_formats())
    try:
        compatible = engine.is_compatible(FormatType(source), FormatType(target))
    except TreeFitterError as e:
        _fail(e)
        return
    click.echo(f"{source} → {target}: {'Compatible' if compatible else 'Not compatible'}")


if __name__ == '__main__':
    main()
