# File: schemacheck/models.py
"""
SchemaCheck - Core Data Models
===============================
Pydantic V2 models describing a relational schema document as authored in
the visual editor: the schema, its models, their fields and associations.

These models are the engine's *input*.  They are deliberately permissive
about names (empty, too long, odd characters are all accepted) because
reporting such problems is the job of ``schemacheck.validators``, not of
parsing.  Only the document *shape* is enforced here.

The JSON aliases match the external import/export document format, so
``SchemaInfo.model_validate(json_data)`` and
``schema.model_dump(by_alias=True)`` round-trip with it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from schemacheck.utils import array_to_lookup

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.models")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1 bytes.
MAX_IDENTIFIER_LENGTH: int = 63


def _new_id() -> str:
    return str(uuid4())


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DataTypeType(str, Enum):
    """Column data types offered by the editor."""

    STRING = "STRING"
    TEXT = "TEXT"
    CITEXT = "CITEXT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    SMALLINT = "SMALLINT"
    FLOAT = "FLOAT"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    DATE_TIME = "DATE_TIME"
    DATE = "DATE"
    TIME = "TIME"
    BOOLEAN = "BOOLEAN"
    ENUM = "ENUM"
    ARRAY = "ARRAY"
    JSON = "JSON"
    JSONB = "JSONB"
    BLOB = "BLOB"
    UUID = "UUID"


class AssociationKind(str, Enum):
    """Association cardinalities."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"


class ThroughKind(str, Enum):
    """How a many-to-many association is joined."""

    THROUGH_TABLE = "THROUGH_TABLE"
    THROUGH_MODEL = "THROUGH_MODEL"


class UuidVersion(str, Enum):
    V1 = "V1"
    V4 = "V4"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class DataType(BaseModel):
    """
    A field's data type, tagged by ``type``.

    Only the attributes meaningful for the tag are expected to be set; the
    rest stay ``None``.  The engine never validates data types, it only
    carries them so documents round-trip unchanged.
    """

    model_config = _SHARED_CONFIG

    type: DataTypeType = Field(default=DataTypeType.STRING, description="Type tag.")
    length: Optional[int] = Field(default=None, ge=1, description="STRING length.")
    unsigned: Optional[bool] = Field(default=None, description="Integer types.")
    autoincrement: Optional[bool] = Field(default=None, description="Integer types.")
    precision: Optional[int] = Field(default=None, ge=0, description="DECIMAL precision.")
    scale: Optional[int] = Field(default=None, ge=0, description="DECIMAL scale.")
    values: Optional[List[str]] = Field(default=None, description="ENUM values.")
    array_type: Optional["DataType"] = Field(
        default=None, alias="arrayType", description="ARRAY element type."
    )
    default_value: Optional[Any] = Field(
        default=None, alias="defaultValue", description="Literal default value."
    )
    default_now: Optional[bool] = Field(
        default=None, alias="defaultNow", description="Temporal types: default to now()."
    )
    default_version: Optional[UuidVersion] = Field(
        default=None, alias="defaultVersion", description="UUID default generator."
    )


# ---------------------------------------------------------------------------
# Association kinds (a tagged variant nested inside a tagged variant)
# ---------------------------------------------------------------------------


class ThroughTable(BaseModel):
    """Many-to-many joined through a plain table the ORM creates."""

    model_config = _SHARED_CONFIG

    type: Literal["THROUGH_TABLE"] = "THROUGH_TABLE"
    table: str = Field(default="", description="Join table name.")

    @property
    def kind(self) -> ThroughKind:
        return ThroughKind.THROUGH_TABLE


class ThroughModel(BaseModel):
    """Many-to-many joined through another model of the schema."""

    model_config = ConfigDict(**_SHARED_CONFIG, protected_namespaces=())

    type: Literal["THROUGH_MODEL"] = "THROUGH_MODEL"
    model_id: str = Field(..., alias="modelId", description="Id of the join model.")

    @property
    def kind(self) -> ThroughKind:
        return ThroughKind.THROUGH_MODEL


Through = Annotated[Union[ThroughTable, ThroughModel], Field(discriminator="type")]


class OneToOne(BaseModel):
    model_config = _SHARED_CONFIG

    type: Literal["ONE_TO_ONE"] = "ONE_TO_ONE"

    @property
    def kind(self) -> AssociationKind:
        return AssociationKind.ONE_TO_ONE


class OneToMany(BaseModel):
    model_config = _SHARED_CONFIG

    type: Literal["ONE_TO_MANY"] = "ONE_TO_MANY"

    @property
    def kind(self) -> AssociationKind:
        return AssociationKind.ONE_TO_MANY


class ManyToOne(BaseModel):
    model_config = _SHARED_CONFIG

    type: Literal["MANY_TO_ONE"] = "MANY_TO_ONE"

    @property
    def kind(self) -> AssociationKind:
        return AssociationKind.MANY_TO_ONE


class ManyToMany(BaseModel):
    """Many-to-many association; the only kind carrying extra names."""

    model_config = _SHARED_CONFIG

    type: Literal["MANY_TO_MANY"] = "MANY_TO_MANY"
    through: Through = Field(
        default_factory=ThroughTable, description="Join table or join model."
    )
    target_fk: Optional[str] = Field(
        default=None, alias="targetFk", description="Foreign key to the target on the join."
    )

    @property
    def kind(self) -> AssociationKind:
        return AssociationKind.MANY_TO_MANY


AssociationType = Annotated[
    Union[OneToOne, OneToMany, ManyToOne, ManyToMany],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Schema entities
# ---------------------------------------------------------------------------


class FieldInfo(BaseModel):
    """One attribute of a model."""

    model_config = _SHARED_CONFIG

    id: str = Field(default_factory=_new_id, description="Stable opaque id.")
    name: str = Field(default="", description="Field name.")
    type: DataType = Field(default_factory=DataType, description="Data type.")
    primary_key: bool = Field(default=False, alias="primaryKey")
    required: bool = Field(default=False)
    unique: bool = Field(default=False)

    def __repr__(self) -> str:
        pk_flag: str = " PK" if self.primary_key else ""
        return f"<Field {self.name!r} {self.type.type.value}{pk_flag}>"


class AssociationInfo(BaseModel):
    """A directed relationship from ``source_model_id`` to ``target_model_id``."""

    model_config = _SHARED_CONFIG

    id: str = Field(default_factory=_new_id, description="Stable opaque id.")
    alias: Optional[str] = Field(default=None, description="Optional association name.")
    foreign_key: Optional[str] = Field(
        default=None, alias="foreignKey", description="Optional foreign key override."
    )
    source_model_id: str = Field(..., alias="sourceModelId")
    target_model_id: str = Field(..., alias="targetModelId")
    type: AssociationType = Field(..., description="Association kind.")

    @property
    def kind(self) -> AssociationKind:
        return self.type.kind

    def __repr__(self) -> str:
        alias: str = f" as {self.alias}" if self.alias else ""
        return (
            f"<Association {self.kind.value} "
            f"{self.source_model_id} -> {self.target_model_id}{alias}>"
        )


class ModelInfo(BaseModel):
    """One relational entity."""

    model_config = _SHARED_CONFIG

    id: str = Field(default_factory=_new_id, description="Stable opaque id.")
    name: str = Field(default="", description="Model name.")
    table_name: str = Field(default="", alias="tableName", description="Table override.")
    soft_delete: bool = Field(default=False, alias="softDelete")
    timestamps: bool = Field(default=True)
    fields: List[FieldInfo] = Field(default_factory=list)
    associations: List[AssociationInfo] = Field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"<Model {self.name!r} ({len(self.fields)} fields, "
            f"{len(self.associations)} associations)>"
        )


class SchemaInfo(BaseModel):
    """
    The root document: a named, ordered collection of models.

    Model order is display order only; validation never depends on it.
    """

    model_config = _SHARED_CONFIG

    id: str = Field(default_factory=_new_id, description="Stable opaque id.")
    name: str = Field(default="", description="Schema display name.")
    models: List[ModelInfo] = Field(default_factory=list)

    def model_by_id(self) -> Dict[str, ModelInfo]:
        """Build the id -> model lookup (O(M)); callers build it once per pass."""
        return array_to_lookup(self.models, lambda m: m.id)

    @property
    def total_fields(self) -> int:
        return sum(len(m.fields) for m in self.models)

    @property
    def total_associations(self) -> int:
        return sum(len(m.associations) for m in self.models)

    def __repr__(self) -> str:
        return (
            f"<Schema {self.name!r} {len(self.models)} models, "
            f"{self.total_fields} fields, "
            f"{self.total_associations} associations>"
        )


# ---------------------------------------------------------------------------
# Validation configuration
# ---------------------------------------------------------------------------


class ValidationConfig(BaseModel):
    """
    Settings injected into every validation call.

    ``max_identifier_length`` is owned by the persistence layer (the target
    database's identifier limit); the engine only reads it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    max_identifier_length: int = Field(
        default=MAX_IDENTIFIER_LENGTH,
        ge=1,
        alias="maxIdentifierLength",
        description="Longest accepted identifier, in characters.",
    )


DEFAULT_CONFIG: ValidationConfig = ValidationConfig()


DataType.model_rebuild()

# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "MAX_IDENTIFIER_LENGTH",
    "DataTypeType",
    "AssociationKind",
    "ThroughKind",
    "UuidVersion",
    "DataType",
    "ThroughTable",
    "ThroughModel",
    "Through",
    "OneToOne",
    "OneToMany",
    "ManyToOne",
    "ManyToMany",
    "AssociationType",
    "FieldInfo",
    "AssociationInfo",
    "ModelInfo",
    "SchemaInfo",
    "ValidationConfig",
    "DEFAULT_CONFIG",
]

logger.debug("schemacheck.models loaded — %d public symbols.", len(__all__))
