"""Build orchestration and process entry point."""

import asyncio
import logging
import sys
import time

from etsc.cli import configure_logging, parse_args
from etsc.config import Config, read_user_config
from etsc.metadata import get_build_metadata
from etsc.steps import build_source_files, clean_output_dir, copy_non_source_files

logger = logging.getLogger(__name__)


async def run_build(config: Config, cwd=None) -> Config:
    """
    Transpile sources and copy assets concurrently.

    Both steps are awaited; the first failure propagates.

    Args:
        config: Merged user configuration
        cwd: Project directory (default: current directory)

    Returns:
        Config: The configuration the build ran with
    """
    metadata = get_build_metadata(config, cwd)

    if config.clean:
        clean_output_dir(metadata.out_dir)

    started = time.perf_counter()
    await asyncio.gather(
        build_source_files(metadata.esbuild_options, silent=config.silent),
        copy_non_source_files(metadata.assets_options),
    )

    if not config.silent:
        logger.info("Built in %.3fms", (time.perf_counter() - started) * 1000)
    return config


def main(argv=None) -> int:
    """
    Run a full build from command-line arguments.

    Returns:
        int: 0 on success, 1 on any error
    """
    args = parse_args(argv)
    configure_logging(silent=bool(args.silent), debug=args.debug)

    try:
        config = read_user_config(args)
        # The config file may switch silent mode on
        configure_logging(silent=config.silent, debug=config.debug)
        asyncio.run(run_build(config))
    except Exception as e:
        logger.error("%s", e)
        logger.debug("Build failed", exc_info=True)
        return 1
    return 0


def cli():
    """Console script entry point."""
    sys.exit(main())
