"""Closed enumerations shared by commands, configs and the CLI."""

from __future__ import annotations

from enum import Enum


class JavaFileType(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    ANNOTATION = "annotation"

    @property
    def declaration_node_type(self) -> str:
        return _DECLARATION_NODE_TYPES[self]


_DECLARATION_NODE_TYPES = {
    JavaFileType.CLASS: "class_declaration",
    JavaFileType.INTERFACE: "interface_declaration",
    JavaFileType.ENUM: "enum_declaration",
    JavaFileType.RECORD: "record_declaration",
    JavaFileType.ANNOTATION: "annotation_type_declaration",
}


class JavaSourceDirectoryType(str, Enum):
    MAIN = "main"
    TEST = "test"
    ALL = "all"

    @property
    def relative_path(self) -> tuple[str, ...]:
        if self is JavaSourceDirectoryType.MAIN:
            return ("src", "main", "java")
        if self is JavaSourceDirectoryType.TEST:
            return ("src", "test", "java")
        return ("src",)


class CascadeType(str, Enum):
    ALL = "all"
    PERSIST = "persist"
    MERGE = "merge"
    REMOVE = "remove"
    REFRESH = "refresh"
    DETACH = "detach"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class FetchType(str, Enum):
    LAZY = "lazy"
    EAGER = "eager"
    NONE = "none"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class CollectionType(str, Enum):
    SET = "set"
    LIST = "list"
    COLLECTION = "collection"

    @property
    def java_type(self) -> str:
        return self.value.capitalize()


class MappingType(str, Enum):
    UNIDIRECTIONAL_JOIN_COLUMN = "unidirectional_join_column"
    BIDIRECTIONAL_JOIN_COLUMN = "bidirectional_join_column"


class OtherType(str, Enum):
    MANDATORY = "mandatory"
    UNIQUE = "unique"
    ORPHAN_REMOVAL = "orphan_removal"
    LARGE_OBJECT = "large_object"
    EQUALS_HASHCODE = "equals_hashcode"
    MUTABLE = "mutable"


class JavaIdGeneration(str, Enum):
    NONE = "none"
    AUTO = "auto"
    IDENTITY = "identity"
    SEQUENCE = "sequence"
    UUID = "uuid"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class JavaIdGenerationType(str, Enum):
    NONE = "none"
    ORM_PROVIDED = "orm_provided"
    ENTITY_EXCLUSIVE_GENERATION = "entity_exclusive_generation"


class JavaEnumType(str, Enum):
    ORDINAL = "ordinal"
    STRING = "string"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class JavaFieldTemporal(str, Enum):
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class JavaFieldTimeZoneStorage(str, Enum):
    NATIVE = "native"
    NORMALIZE = "normalize"
    NORMALIZE_UTC = "normalize_utc"
    COLUMN = "column"
    AUTO = "auto"

    @property
    def java_name(self) -> str:
        return self.value.upper()


class JavaBasicFieldTypeKind(str, Enum):
    ALL = "all"
    ID = "id"
    TYPES_WITH_LENGTH = "types-with-length"
    TYPES_WITH_TIME_ZONE_STORAGE = "types-with-time-zone-storage"
    TYPES_WITH_TEMPORAL = "types-with-temporal"
    TYPES_WITH_EXTRA_OTHER = "types-with-extra-other"
    TYPES_WITH_PRECISION_AND_SCALE = "types-with-precision-and-scale"


class EntitySide(str, Enum):
    OWNING = "owning"
    INVERSE = "inverse"
