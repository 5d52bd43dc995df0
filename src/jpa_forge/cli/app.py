import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from jpa_forge.cli.create import (
    create_java_file,
    create_jpa_entity,
    create_jpa_entity_basic_field,
    create_jpa_entity_enum_field,
    create_jpa_entity_id_field,
    create_jpa_many_to_one_relationship,
    create_jpa_one_to_one_relationship,
    create_jpa_repository,
)
from jpa_forge.cli.discover import (
    get_all_files,
    get_all_jpa_entities,
    get_all_jpa_mapped_superclasses,
    get_all_packages,
    get_java_basic_types,
    get_java_files,
    get_jpa_entity_info,
)
from jpa_forge.cli.serve import serve_app
from jpa_forge.config import get_log_level

app = typer.Typer(
    name="jpa-forge",
    help="jpa-forge: structural edits to JPA entities, driven by tree-sitter.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level (default from JPA_FORGE_LOG_LEVEL).")
    ] = None,
) -> None:
    # stdout carries only the JSON response, so logs go to stderr.
    logging.basicConfig(
        level=(log_level or get_log_level()).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("get-all-files")(get_all_files)
app.command("get-java-files")(get_java_files)
app.command("get-all-jpa-entities")(get_all_jpa_entities)
app.command("get-all-jpa-mapped-superclasses")(get_all_jpa_mapped_superclasses)
app.command("get-all-packages")(get_all_packages)
app.command("get-java-basic-types")(get_java_basic_types)
app.command("get-jpa-entity-info")(get_jpa_entity_info)
app.command("create-java-file")(create_java_file)
app.command("create-jpa-entity")(create_jpa_entity)
app.command("create-jpa-repository")(create_jpa_repository)
app.command("create-jpa-entity-id-field")(create_jpa_entity_id_field)
app.command("create-jpa-entity-basic-field")(create_jpa_entity_basic_field)
app.command("create-jpa-entity-enum-field")(create_jpa_entity_enum_field)
app.command("create-jpa-many-to-one-relationship")(create_jpa_many_to_one_relationship)
app.command("create-jpa-one-to-one-relationship")(create_jpa_one_to_one_relationship)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
