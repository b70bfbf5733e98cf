"""CLI interface for sensorprobe."""

import json
import logging
import sys

import click

import sensorprobe
from sensorprobe import log
from sensorprobe.errors import SensorProbeError, UnsupportedError
from sensorprobe.extractor import MetadataParser

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=sensorprobe.__version__, prog_name='sensorprobe')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--verbose', '-v', count=True,
              help='Increase log verbosity (repeat up to -vvvv).')
@click.option('--json', 'as_json', is_flag=True,
              help='Print the result as JSON instead of its debug form.')
@click.option('--no-color', is_flag=True, help='Disable colored error output.')
def main(input_file, verbose, as_json, no_color):
    """Extract camera model, serial number, sensitivity, exposure time and
    sensor temperature from INPUT_FILE.
    """
    log.configure_logging(verbose)
    if no_color:
        log.set_color_enabled(False)

    try:
        metadata = MetadataParser().read_file(input_file)
    except UnsupportedError as e:
        logger.debug("Unsupported input", exc_info=True)
        click.echo(log.cli_warning(f'Unsupported: {e}'), err=True)
        sys.exit(1)
    except SensorProbeError as e:
        logger.debug("Extraction failed", exc_info=True)
        click.echo(log.cli_error(f'Error: {e}'), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(metadata.to_dict(), indent=2))
    else:
        click.echo(repr(metadata))


if __name__ == '__main__':
    main()
