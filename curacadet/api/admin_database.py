# curacadet/api/admin_database.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from curacadet.api.deps import get_db, require_roles, SUPER_ADMIN_ROLES
from curacadet.crud import admin_database as crud_database
from curacadet.schemas.admin import (
    AdminQuery,
    AdminQueryResult,
    ColumnCreate,
    RowDelete,
    RowUpdate,
    TableList,
    TableRows,
)

# Every endpoint here is super_admin only; the SQL console is unrestricted otherwise
router = APIRouter(dependencies=[Depends(require_roles(*SUPER_ADMIN_ROLES))])


@router.get("/tables", response_model=TableList)
def get_tables(db: Session = Depends(get_db)):
    return {
        "tables": crud_database.list_tables(db),
        "host": crud_database.database_host(),
    }


@router.post("/execute", response_model=AdminQueryResult)
def execute_query(payload: AdminQuery, db: Session = Depends(get_db)):
    return crud_database.execute_admin_query(db, payload.query)


@router.get("/tables/{table}/rows", response_model=TableRows)
def get_table_rows(
    table: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return crud_database.fetch_table_rows(db, table, limit)


@router.put("/tables/{table}/rows")
def update_table_cell(table: str, payload: RowUpdate, db: Session = Depends(get_db)):
    crud_database.update_cell(db, table, payload.column, payload.row, payload.value)
    return {"message": "Cell updated"}


@router.delete("/tables/{table}/rows")
def delete_table_row(table: str, payload: RowDelete, db: Session = Depends(get_db)):
    crud_database.delete_row(db, table, payload.row)
    return {"message": "Row deleted"}


@router.post("/tables/{table}/columns", status_code=201)
def add_table_column(table: str, payload: ColumnCreate, db: Session = Depends(get_db)):
    crud_database.add_column(db, table, payload.name, payload.type)
    return {"message": f"Column {payload.name} added"}


@router.delete("/tables/{table}/columns/{column}")
def drop_table_column(table: str, column: str, db: Session = Depends(get_db)):
    crud_database.drop_column(db, table, column)
    return {"message": f"Column {column} deleted"}
