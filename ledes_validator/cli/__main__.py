from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ledes_validator.codec.ledes98bi import LedesFormatError, parse
from ledes_validator.config.loader import DEFAULT_CONFIG_PATH, ConfigError, RunConfig, load_config
from ledes_validator.logging.init import log_summary, setup_logging
from ledes_validator.services.orchestrator import ProcessingError, process_all, scan_ledes_files
from ledes_validator.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load ``.env`` (may set LEDES_CONFIG / LEDES_SOURCE_DIRECTORY)
- Load and validate the YAML config
- Validate every LEDES file in the source directory
- Print the SUMMARY line and map the outcome to an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_FINDINGS = 2

CONFIG_PATH_ENV = "LEDES_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load ``.env`` with python-dotenv; a broken file only produces a warning."""
    if not path.exists():
        return
    try:
        load_dotenv(dotenv_path=path, override=override)
    except (OSError, UnicodeDecodeError) as e:  # pragma: no cover
        logging.getLogger(__name__).warning(f"failed to load .env: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="LEDES98BI invoice file validator")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers & first rows of each file then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: RunConfig) -> int:
    try:
        files = scan_ledes_files(Path(cfg.source_directory), cfg.file_extensions)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no LEDES files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            dataset = parse(f.read_text(encoding=cfg.encoding))
        except (OSError, UnicodeDecodeError, LedesFormatError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  headers({len(dataset.headers)})={dataset.headers}")
        print(f"  rows={len(dataset.rows)}")
        for record in dataset.rows[:INSPECT_SAMPLE_ROWS]:
            sample = {k: v for k, v in record.to_dict(dataset.headers).items() if v}
            print(f"    {sample}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no list was passed ([] must stay empty)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = args.config or Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Validating files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.invalid_files > 0 or result.failed_files > 0:
        return EXIT_FINDINGS
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
