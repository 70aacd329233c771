"""Transpile step: run esbuild over the entry points."""

import asyncio
import logging

from etsc.errors import BuildError

logger = logging.getLogger(__name__)

PLATFORM = "node"


def build_command(options, silent=False):
    """
    Translate EsbuildOptions into an esbuild command line.

    Files are transpiled one-to-one (no bundling) for the node platform.
    """
    cmd = [options.binary, *options.entry_points]
    cmd.append(f"--outdir={options.outdir}")
    cmd.append(f"--platform={PLATFORM}")
    cmd.append(f"--format={options.format}")
    cmd.append(f"--target={options.target}")

    if options.sourcemap == "inline":
        cmd.append("--sourcemap=inline")
    elif options.sourcemap:
        cmd.append("--sourcemap")

    if options.minify:
        cmd.append("--minify")
    if options.tsconfig:
        cmd.append(f"--tsconfig={options.tsconfig}")

    cmd.append(f"--log-level={'error' if silent else 'warning'}")
    return cmd


async def build_source_files(options, silent=False):
    """
    Run esbuild and wait for it to finish.

    Args:
        options: EsbuildOptions from the build metadata
        silent: Only let esbuild report errors

    Raises:
        BuildError: If esbuild is missing or exits with a non-zero status
    """
    if not options.entry_points:
        logger.warning("No source files to transpile")
        return

    cmd = build_command(options, silent)
    logger.debug("Running %s", " ".join(cmd))
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise BuildError(f"'{options.binary}' was not found on PATH") from e

    _, stderr = await process.communicate()
    output = stderr.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise BuildError(f"esbuild exited with status {process.returncode}", output)

    if output:
        logger.warning("%s", output)
    logger.debug(
        "Transpiled %d file(s) into %s", len(options.entry_points), options.outdir
    )
