"""Command-line host that builds a Bootstrap translation service and prints its parameters."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import yaml

from . import __version__
from .cloud_config import MappingCloudConfigResolver
from .config import load_config
from .crypto import CryptoSupport, FernetCryptoSupport
from .exceptions import CryptoError, TranslationError
from .factory import BootstrapTranslationServiceFactory
from .logging_utils import setup_logging
from .resources import MappingResourceResolverFactory
from .types import TranslationMethod

logger = logging.getLogger(__name__)

KEY_ENV_VAR = "BOOTSTRAP_CONNECTOR_KEY"

_METHODS = {
    "human": TranslationMethod.HUMAN_TRANSLATION,
    "machine": TranslationMethod.MACHINE_TRANSLATION,
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: The parsed arguments.

    """
    parser = argparse.ArgumentParser(description="Bootstrap Translation Connector")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"Bootstrap Connector {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug level logging.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the debug log to this file.")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    describe_parser = subparsers.add_parser("describe", help="Build a translation service and print its parameters.")
    describe_parser.add_argument("--config", required=True, type=Path, help="YAML file with the factory configuration.")
    describe_parser.add_argument("--cloud-configs", required=True, type=Path, help="YAML file mapping cloud config paths to settings.")
    describe_parser.add_argument("--resources", required=True, type=Path, help="YAML file holding the resource tree.")
    describe_parser.add_argument("--cloud-config-path", required=True, help="The cloud configuration to build the service for.")
    describe_parser.add_argument("--method", choices=sorted(_METHODS), default="machine", help="The translation method (default: machine).")

    return parser.parse_args(argv)


def _build_crypto_support() -> CryptoSupport | None:
    """Build a crypto support from the key in the environment, if one is set."""
    key = os.environ.get(KEY_ENV_VAR)
    if not key:
        logger.debug("%s is not set; protected values will not be decrypted.", KEY_ENV_VAR)
        return None
    return FernetCryptoSupport(key)


def _describe(args: argparse.Namespace) -> dict:
    """Assemble the factory from the given files and build one service."""
    config = load_config(args.config)
    factory = BootstrapTranslationServiceFactory(
        MappingCloudConfigResolver.from_yaml(args.cloud_configs),
        MappingResourceResolverFactory.from_yaml(args.resources),
        crypto_support=_build_crypto_support(),
    )
    factory.activate(config)
    service = factory.create_translation_service(_METHODS[args.method], args.cloud_config_path)
    return {
        "factory_name": factory.get_service_factory_name(),
        "supported_translation_methods": [m.value for m in factory.get_supported_translation_methods()],
        "service": service.describe(),
    }


def main(argv: list[str] | None = None) -> None:
    """Run the command-line host."""
    args = _parse_args(argv)
    setup_logging(version=__version__, debug=args.debug, log_file=args.log_file)

    try:
        description = _describe(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError, CryptoError, TranslationError):
        logger.exception("Failed to build the translation service.")
        sys.exit(1)

    sys.stdout.write(json.dumps(description, indent=2, ensure_ascii=False) + "\n")


if __name__ == "__main__":
    main()
