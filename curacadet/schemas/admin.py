# curacadet/schemas/admin.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class AdminQuery(BaseModel):
    query: Optional[Any] = None


class FieldInfo(BaseModel):
    name: str


class AdminQueryResult(BaseModel):
    """Uniform result of an ad-hoc statement; values keep explicit nulls."""

    rows: List[Dict[str, Any]]
    row_count: int = Field(alias="rowCount")
    fields: List[FieldInfo] = []

    class Config:
        populate_by_name = True


class TableRows(AdminQueryResult):
    columns: List[str]


class TableInfo(BaseModel):
    table_name: str


class TableList(BaseModel):
    tables: List[TableInfo]
    host: str


class RowUpdate(BaseModel):
    row: Dict[str, Any]
    column: str
    value: Optional[Any] = None


class RowDelete(BaseModel):
    row: Dict[str, Any]


class ColumnCreate(BaseModel):
    name: str
    type: str = "VARCHAR(255)"
