"""Pydantic models for database introspection and model generation"""

from pathlib import Path

from pydantic import BaseModel, Field

# ============================================================================
# Introspection Models
# ============================================================================


class ConnectionContext(BaseModel):
    """Connection details resolved once against a live database"""

    connection_string: str = Field(description="SQLAlchemy database URL")
    schema_name: str | None = Field(default=None, description="Schema used to qualify table names")
    catalog: str = Field(description="Active catalog (database name) of the connection")
    dialect: str = Field(description="SQLAlchemy dialect name (mssql, postgresql, mysql, sqlite)")

    model_config = {"frozen": True}


class TableDescriptor(BaseModel):
    """A table listed by the catalog query"""

    name: str = Field(description="Table name as reported by the database")
    catalog: str = Field(description="Catalog (database) the table belongs to")


class ColumnDescriptor(BaseModel):
    """A column described by a zero-row query"""

    name: str = Field(description="Column name as reported by the driver")
    native_type_name: str = Field(default="", description="Engine-specific type name, empty when unknown")
    is_nullable: bool = Field(default=True, description="Whether the column allows NULL")


# ============================================================================
# Generation Results
# ============================================================================


class TableResult(BaseModel):
    """Outcome of generating the model for a single table"""

    table: TableDescriptor
    path: Path | None = Field(default=None, description="Written model file, when successful")
    error: str | None = Field(default=None, description="Failure message, when unsuccessful")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return f"Error getting schema for table {self.table.name}: {self.error}"


class GenerationSummary(BaseModel):
    """Aggregated outcome of a generation run"""

    output_directory: Path
    results: list[TableResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def failures(self) -> list[str]:
        return [result.message for result in self.results if result.message is not None]
