#!/usr/bin/env python

import json
import logging
import sys

import click

_logger = logging.getLogger("accesslayout")


def _strip(line, encoding):
    if isinstance(line, bytes):
        line = line.decode(encoding)
    return line.rstrip("\r\n")


def _iter_tar_members(fp):
    import tarfile
    with tarfile.open(fp, 'r') as tar:
        for info in tar.getmembers():
            if info.isfile():
                with tar.extractfile(info) as f:
                    yield from f


def _iter_file(fp, encoding):
    """Yield raw lines of one access log file.
    Rotated logs are often compressed (access.log.1.gz),
    so the opener is chosen by the file name."""
    if ".tar." in fp or fp.endswith(".tgz"):
        yield from _iter_tar_members(fp)
        return
    if fp.endswith(".gz"):
        import gzip
        opener = gzip.open
    elif fp.endswith(".bz2"):
        import bz2
        opener = bz2.open
    else:
        opener = open
    with opener(fp, 'rt', encoding=encoding) as f:
        yield from f


def iter_lines(files, encoding="utf-8"):
    """Yield access log lines without line feed codes
    from files, or from stdin if no files are given."""
    if len(files) == 0:
        sources = [sys.stdin]
    else:
        sources = (_iter_file(fp, encoding) for fp in files)
    for source in sources:
        for line in source:
            yield _strip(line, encoding)


def format_parsed_line(pline, format_type):
    if format_type == "object":
        return str(pline)
    elif format_type == "json":
        return json.dumps(pline, sort_keys=True)


def build_parser(preset_names, layouts, config, script, null_value):
    from ._common import LogParser
    from .format import LayoutFormat
    from .load import load_from_config, load_from_script
    from .preset import get_preset, default_format

    formats = []
    if config:
        tmp_formats, tmp_null_value = load_from_config(config)
        formats += tmp_formats
        if null_value is None:
            null_value = tmp_null_value
    if script:
        formats += load_from_script(script)
    for i, layout in enumerate(layouts):
        formats.append(LayoutFormat("layout{0}".format(i), layout))
    for name in preset_names:
        formats.append(get_preset(name))
    if len(formats) == 0:
        formats = [default_format()]
    return LogParser(formats, null_value=null_value)


@click.command()
@click.argument("files", nargs=-1)
@click.option("--format", "-f", "preset_names", multiple=True,
              help="name of preset format (common, combined, apache_default)")
@click.option("--layout", "-l", "layouts", multiple=True,
              help="Apache LogFormat layout string")
@click.option("--config", "-c", default=None,
              help="filename of format config")
@click.option("--script", default=None,
              help="filename of format script")
@click.option("--encoding", default="utf-8",
              help="encoding to load input data")
@click.option("--output", "-o", default=None,
              help="output filename")
@click.option("--type", "-t", "format_type", default="object",
              type=click.Choice(["object", "json"]),
              help="output format type")
@click.option("--null-value", "null_value", default=None,
              help="drop fields with this value (e.g., -)")
@click.option("--show-input", "-i", "show_input", is_flag=True,
              help="additionally show the input string line as is")
@click.option("--show-regex", "show_regex", is_flag=True,
              help="show compiled regular expressions and exit")
@click.option("--skip-mismatch", "skip_mismatch", is_flag=True,
              help="skip lines not matching any format")
@click.option("--verbose", "-v", is_flag=True,
              help="verbose output to stderr")
def main(files, preset_names, layouts, config, script, encoding, output,
         format_type, null_value, show_input, show_regex, skip_mismatch,
         verbose):
    """Parse access log lines given in FILES (or stdin if FILES not given)."""

    logging.basicConfig(stream=sys.stderr,
                        level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    from ._common import LayoutDefinitionError, LogParseFailure
    try:
        lp = build_parser(preset_names, layouts, config, script, null_value)
    except LayoutDefinitionError as e:
        raise click.UsageError(str(e))

    if show_regex:
        for fmt in lp.formats:
            click.echo("{0}: {1}".format(fmt.name, fmt.regex))
        return

    if output:
        f_output = open(output, "w")
    else:
        f_output = sys.stdout

    try:
        for line in iter_lines(files, encoding=encoding):
            if line != "":
                if show_input:
                    f_output.write(line + "\n")
                try:
                    pline = lp.process_line(line, verbose=verbose)
                except LogParseFailure as e:
                    if skip_mismatch:
                        _logger.warning(str(e))
                        continue
                    raise click.ClickException(str(e))
                buf = format_parsed_line(pline, format_type)
                f_output.write(buf + "\n")
    finally:
        if output:
            f_output.close()


if __name__ == "__main__":
    main()
