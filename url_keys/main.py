#!/usr/bin/env python3
"""Command-line entry point for url-keys.

Usage:
    url-keys generate --value "Blue Shoes" --store-id 1
    url-keys generate --value "Blue Shoes" --entity-id 42 --scope global --save
    url-keys check --path blue-shoes.html --store-id 1
"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from url_keys.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_URL_KEY_ATTRIBUTE,
)
from url_keys.exceptions import UrlKeyError
from url_keys.models.config import AppConfig
from url_keys.models.entities import DataEntity
from url_keys.models.paths import AttributeDescriptor, AttributeScope
from url_keys.resolver.url_key_generator import UrlKeyGenerator
from url_keys.storage.path_index import JsonPathIndex
from url_keys.storage.scopes import MappingConfigLookup, StaticScopeRegistry
from url_keys.utils.config_loader import load_app_config
from url_keys.utils.formatting import DataFormatter, FormatterOptions
from url_keys.utils.logging import setup_logging
from url_keys.utils.slug import format_url_key

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Generate URL keys that are unique across store scopes.")

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", envvar=CONFIG_ENV_VAR, help="Path to configuration file"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging"),
]

PATH_FORMATTER = DataFormatter(
    FormatterOptions(
        glue=" | ",
        value_wrap_pattern="{field}={value}",
        included_fields=["store_id", "entity_id", "entity_type", "request_path"],
        prepend="  • ",
    )
)


def load_config(config_file: Path, verbose: bool) -> AppConfig:
    """Load configuration (defaults if the file is missing) and configure logging."""
    if config_file.exists():
        config = load_app_config(config_file)
    else:
        logger.warning("Config file not found, using defaults", path=str(config_file))
        config = AppConfig()

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    setup_logging(logging_config)

    return config


def build_generator(
    config: AppConfig, index: JsonPathIndex, attribute: AttributeDescriptor
) -> UrlKeyGenerator:
    return UrlKeyGenerator(
        storage=index,
        scope_registry=StaticScopeRegistry(config.stores),
        config_lookup=MappingConfigLookup(config.config_values),
        attribute=attribute,
        config=config.resolver,
    )


@app.command()
def generate(
    value: Annotated[str, typer.Option("--value", help="Candidate URL key or product name")],
    config_file: ConfigOption = Path(DEFAULT_CONFIG_FILE),
    entity_id: Annotated[
        Optional[int], typer.Option("--entity-id", help="ID of the entity being saved")
    ] = None,
    entity_type: Annotated[
        str, typer.Option("--entity-type", help="Entity type code")
    ] = "catalog_product",
    attribute_code: Annotated[
        str, typer.Option("--attribute-code", help="Attribute holding the URL key")
    ] = DEFAULT_URL_KEY_ATTRIBUTE,
    scope: Annotated[
        AttributeScope, typer.Option("--scope", help="Attribute scope")
    ] = AttributeScope.STORE,
    store_id: Annotated[
        Optional[int], typer.Option("--store-id", help="Store the value is saved under")
    ] = None,
    slugify_value: Annotated[
        bool, typer.Option("--slugify", help="Turn the value into a URL-safe key first")
    ] = False,
    save: Annotated[
        bool, typer.Option("--save", help="Record the projected paths in the index file")
    ] = False,
    show_paths: Annotated[
        bool, typer.Option("--show-paths", help="Print the projected paths")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """
    Generate a URL key that no other entity owns in the applicable stores.
    """
    try:
        config = load_config(config_file, verbose)

        candidate = format_url_key(value) if slugify_value else value
        if not candidate:
            print(f"❌ No usable characters in value: {value!r}", file=sys.stderr)
            sys.exit(1)

        index = JsonPathIndex(config.index_file)
        attribute = AttributeDescriptor(
            entity_type_code=entity_type, attribute_code=attribute_code, scope=scope
        )
        generator = build_generator(config, index, attribute)

        entity = DataEntity({"entity_id": entity_id, "store_id": store_id, attribute_code: candidate})
        result = generator.generate_result(entity)

        print(result.value)

        if not result.available:
            print(f"⚠️  Still colliding after {result.attempts} attempts", file=sys.stderr)

        if show_paths:
            for path in result.paths:
                print(PATH_FORMATTER.format(path))

        if save:
            index.save_paths(result.paths)
            index.save()
            print(f"✅ Recorded {len(result.paths)} path(s) in {config.index_file}", file=sys.stderr)

    except (UrlKeyError, FileNotFoundError, ValidationError, ValueError) as e:
        logger.error("URL key generation failed", error=str(e))
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


@app.command()
def check(
    path: Annotated[str, typer.Option("--path", help="Request path to look up")],
    config_file: ConfigOption = Path(DEFAULT_CONFIG_FILE),
    store_id: Annotated[
        Optional[int], typer.Option("--store-id", help="Limit the lookup to one store")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Show which entities own a request path.
    """
    try:
        config = load_config(config_file, verbose)
        index = JsonPathIndex(config.index_file)

    except (FileNotFoundError, ValidationError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    criteria: dict[str, object] = {"request_path": path}
    if store_id is not None:
        criteria["store_id"] = store_id

    records = index.find_all(criteria)
    if not records:
        print(f"{path} is available")
        return

    for record in records:
        print(PATH_FORMATTER.format(record))
    sys.exit(2)


if __name__ == "__main__":
    app()
