"""Command line entry point for MetalLB legacy resource migration."""

import argparse
import os
import sys

from dotenv import load_dotenv

from .core.exceptions import MetalLBMigrateError
from .core.logging_config import get_logger, setup_logging
from .core.migration import offline_migration, online_migration
from .core.settings import MigrateSettings, load_settings
from .core.store import KubectlStore
from .models import MigrationMode, OutputFormat


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="metallb-migrate",
        description=(
            "Convert legacy MetalLB AddressPools into IPAddressPools, L2Advertisements "
            "and BGPAdvertisements."
        ),
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in MigrationMode],
        default=MigrationMode.OFFLINE.value,
        help=(
            "offline prints converted objects; online replaces legacy objects in the "
            "cluster one by one (default: offline)"
        ),
    )
    parser.add_argument(
        "--input-dir",
        help="Input directory with legacy style YAML or JSON files. "
        "If empty, read directly from the cluster.",
    )
    parser.add_argument(
        "--output-dir",
        help="Output directory for new style YAML or JSON files. If empty, write to stdout.",
    )
    parser.add_argument(
        "--backup-dir",
        help="Directory receiving a copy of all legacy objects before an online migration.",
    )
    parser.add_argument(
        "--json", action="store_true", help="Write output in JSON format (default YAML)"
    )
    parser.add_argument("--kubeconfig", help="kubeconfig file used by kubectl")
    parser.add_argument("--context", help="kubeconfig context used by kubectl")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)
    _validate_args(parser, args)
    return args


def _validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.mode != MigrationMode.ONLINE.value:
        if args.backup_dir:
            parser.error("--backup-dir is only used with --mode online")
        return
    if not args.backup_dir:
        parser.error("--mode online requires --backup-dir")
    if args.input_dir:
        parser.error("--input-dir cannot be used with --mode online")
    if args.output_dir:
        parser.error("--output-dir cannot be used with --mode online")


def _build_store(settings: MigrateSettings) -> KubectlStore:
    return KubectlStore(settings)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = load_settings(
        kubeconfig=args.kubeconfig,
        kube_context=args.context,
        log_level=args.log_level,
    )
    setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)
    logger = get_logger()

    output_format = OutputFormat.JSON if args.json else OutputFormat.YAML
    try:
        if args.mode == MigrationMode.ONLINE.value:
            online_migration(_build_store(settings), args.backup_dir, output_format)
        else:
            store = _build_store(settings) if args.input_dir is None else None
            offline_migration(
                store,
                input_dir=args.input_dir,
                output_dir=args.output_dir,
                output_format=output_format,
                stdout=sys.stdout,
            )
    except KeyboardInterrupt:
        logger.warning("Migration interrupted", mode=args.mode)
        sys.exit(130)
    except MetalLBMigrateError as e:
        logger.error("Migration failed", mode=args.mode, error=str(e))
        print(f"metallb-migrate: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
