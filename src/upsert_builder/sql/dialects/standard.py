"""
SQL-92 style dialect with ON CONFLICT upsert support.

Identifiers are written verbatim and values are represented only by
already-rendered placeholder groups, so the dialect never sees row data.
"""

from typing import Sequence


class StandardDialect:
    """Plain INSERT / ON CONFLICT rendering with unquoted identifiers."""

    name = "standard"

    def build_insert(self, table: str, columns: Sequence[str], rows: Sequence[str]) -> str:
        """
        Build a multi-row INSERT statement.

        Args:
            table: Table name
            columns: Column names, in value order
            rows: Rendered placeholder groups, e.g. ``["(?, ?)", "(?, ?)"]``

        Returns:
            INSERT SQL statement
        """
        return f"INSERT INTO {table} ({', '.join(columns)}) VALUES {', '.join(rows)}"

    def build_insert_on_conflict_do_update(
        self,
        table: str,
        columns: Sequence[str],
        rows: Sequence[str],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        """
        Build INSERT ... ON CONFLICT DO UPDATE statement.

        The conflict clause sits on its own line. Each assignment is rendered
        with a leading space and the assignments are joined by a bare comma,
        so an empty ``update_columns`` leaves ``DO UPDATE SET`` with nothing
        after it.

        Args:
            table: Table name
            columns: Column names to insert
            rows: Rendered placeholder groups
            conflict_columns: Columns for conflict detection
            update_columns: Columns overwritten from ``excluded`` on conflict

        Returns:
            INSERT ... ON CONFLICT SQL statement
        """
        base_insert = self.build_insert(table, columns, rows)
        conflict_cols = ", ".join(conflict_columns)
        update_set = ",".join(f" {col} = excluded.{col}" for col in update_columns)
        return f"{base_insert}\nON CONFLICT ({conflict_cols}) DO UPDATE SET{update_set}"
