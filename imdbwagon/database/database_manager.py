import csv
from io import StringIO
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import pandas as pd
import psycopg2
from psycopg2.sql import SQL, Composed, Identifier
from sqlalchemy import create_engine, func, inspect, literal_column, select, table
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from imdbwagon.exceptions import LoadError
from imdbwagon.logging_config import get_logger
from imdbwagon.objects.connection_descriptor import ConnectionDescriptor

logger = get_logger(__name__)

InsertMethod = Union[None, str, Callable[..., Any]]


class DatabaseManager:
    """
    Thin wrapper around a SQLAlchemy engine for the target database.

    Connection problems do not raise from the constructor. They are kept in
    ``connection_error`` (with the password redacted) so commands can report
    them and abort cleanly.

    Rows are written with pandas ``to_sql``. The insert ``method`` is chosen by
    the caller: PostgreSQL loads use ``copy_from_stdin`` so a file is loaded
    in one COPY statement instead of row by row.
    """

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        engine: Optional[Engine] = None,
    ) -> None:
        self.descriptor = descriptor
        self.connection_error = ""
        self.engine: Optional[Engine] = engine

        if self.engine is None:
            try:
                self.engine = create_engine(descriptor.sqlalchemy_url())
            except (SQLAlchemyError, ImportError) as e:
                # ImportError: the DBAPI driver for this kind is not installed
                self.connection_error = descriptor.redact(str(e))

    @property
    def is_valid_connection(self) -> bool:
        return self.engine is not None and not self.connection_error

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

    def test_connection(self) -> bool:
        if not self.is_valid_connection:
            logger.error(f"Connection error: {self.connection_error}")
            return False
        try:
            with self.engine.connect() as connection:  # type: ignore[union-attr]
                connection.execute(select(literal_column("1")))
            return True
        except SQLAlchemyError as e:
            self.connection_error = self.descriptor.redact(str(e))
            logger.error(f"Connection error: {self.connection_error}")
            return False

    def check_table(self, table_name: str) -> bool:
        """True if ``table_name`` exists and can be queried."""
        if not self.is_valid_connection:
            return False

        query = select(literal_column("1")).select_from(table(table_name)).limit(1)
        try:
            with self.engine.connect() as connection:  # type: ignore[union-attr]
                connection.execute(query)
            return True
        except SQLAlchemyError as e:
            logger.debug(f"Table {table_name} is not queryable: {self.descriptor.redact(str(e))}")
            return False

    def table_names(self) -> List[str]:
        return sorted(inspect(self.engine).get_table_names())  # type: ignore[arg-type]

    def table_columns(self, table_name: str) -> List[str]:
        columns = inspect(self.engine).get_columns(table_name)  # type: ignore[arg-type]
        return [column["name"] for column in columns]

    def tables_and_row_counts(self) -> List[Tuple[str, int]]:
        counts = []
        with self.engine.connect() as connection:  # type: ignore[union-attr]
            for table_name in self.table_names():
                query = select(func.count()).select_from(table(table_name))
                counts.append((table_name, connection.execute(query).scalar_one()))
        return counts

    def load_dataframe_into_database(
        self,
        df: pd.DataFrame,
        table_name: str,
        method: InsertMethod = None,
        chunksize: Optional[int] = None,
    ) -> int:
        """Append ``df`` to ``table_name``, creating the table if needed.

        Returns:
            Number of rows written

        Raises:
            LoadError: If the write fails
        """
        try:
            df.to_sql(
                name=table_name,
                con=self.engine,
                if_exists="append",
                index=False,
                method=method,
                chunksize=chunksize,
            )
        except (SQLAlchemyError, psycopg2.Error, ValueError) as error:
            message = self.descriptor.redact(str(error))
            raise LoadError(f"Failed to load dataframe into {table_name}: {message}") from error

        return len(df)

    @staticmethod
    def copy_from_stdin(
        pd_table: Any,
        conn: Any,
        keys: List[str],
        data_iter: Iterable[Tuple[Any, ...]],
    ) -> None:
        """pandas insert method that streams rows through PostgreSQL COPY."""
        # Convert the DataFrame iterable (back) into CSV format
        buffer = StringIO()
        writer = csv.writer(buffer)
        writer.writerows(data_iter)
        buffer.seek(0)

        if pd_table.schema:
            target = Identifier(pd_table.schema, pd_table.name)
        else:
            target = Identifier(pd_table.name)
        columns: Composed = SQL(", ").join([Identifier(key) for key in keys])

        raw_connection = conn.connection
        with raw_connection.cursor() as cursor:
            sql = SQL("copy {} ({}) from stdin with csv").format(target, columns)
            cursor.copy_expert(sql=sql, file=buffer)
