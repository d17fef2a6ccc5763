"""Write derivative CSV table dumps straight into the database.

Used when the primary imdbpy2sql load cannot be verified. Each ``<table>.csv``
file in the load directory is appended to the table of the same name. Files
carry no header row, so when the table already exists its columns are matched
by position.
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

import pandas as pd

from imdbwagon.database.database_manager import DatabaseManager, InsertMethod
from imdbwagon.exceptions import FallbackUnsupportedError, LoadError
from imdbwagon.logging_config import get_logger
from imdbwagon.objects.connection_descriptor import DatabaseKind
from imdbwagon.objects.csv_dialect import CsvDialect

logger = get_logger(__name__)


class FallbackLoader:
    """Base fallback loader; subclasses pick the insert method per database kind.

    Partial failures: by default every file is attempted and a single LoadError
    naming the failed tables is raised at the end. With ``stop_on_error`` the
    first failure is raised immediately.
    """

    kind: DatabaseKind
    insert_method: InsertMethod = None
    chunksize: Optional[int] = None

    def __init__(
        self,
        dialect: Optional[CsvDialect] = None,
        stop_on_error: bool = False,
    ) -> None:
        self.dialect = dialect or CsvDialect()
        self.stop_on_error = stop_on_error

    def table_files(self, load_dir: Path) -> List[Path]:
        return sorted(path for path in load_dir.glob(f"*{self.dialect.extension}") if path.is_file())

    def table_name_for(self, path: Path) -> str:
        return path.name[: -len(self.dialect.extension)]

    def read_table_file(self, path: Path) -> pd.DataFrame:
        """Read a headerless dump; an empty file gives an empty frame."""
        try:
            return pd.read_csv(
                path,
                header=None,
                sep=self.dialect.delimiter,
                quotechar=self.dialect.quotechar,
                escapechar=self.dialect.escapechar,
                na_values=[self.dialect.null_marker],
                keep_default_na=False,
                encoding=self.dialect.encoding,
                dtype=object,
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise LoadError(f"Unable to parse {path.name}: {e}") from e

    def column_names(self, db_manager: DatabaseManager, table_name: str, width: int) -> List[str]:
        """Existing column names in table order, or V1..Vn for a new table."""
        if not db_manager.check_table(table_name):
            return [f"V{i}" for i in range(1, width + 1)]

        existing = db_manager.table_columns(table_name)
        if len(existing) < width:
            raise LoadError(
                f"{table_name} has {len(existing)} columns but its dump file has {width}"
            )
        return existing[:width]

    def load_table(self, db_manager: DatabaseManager, path: Path) -> int:
        table_name = self.table_name_for(path)
        df = self.read_table_file(path)
        if df.empty:
            logger.info(f"{path.name} is empty, nothing to write")
            return 0

        df.columns = self.column_names(db_manager, table_name, len(df.columns))
        return db_manager.load_dataframe_into_database(
            df, table_name, method=self.insert_method, chunksize=self.chunksize
        )

    def load_fallback(self, db_manager: DatabaseManager, load_dir: Path) -> List[Tuple[str, int]]:
        """Append every table dump in ``load_dir`` to the database.

        Returns:
            (table name, rows written) for each loaded file

        Raises:
            LoadError: If any table could not be written
        """
        loaded: List[Tuple[str, int]] = []
        failed: List[str] = []

        for path in self.table_files(load_dir):
            table_name = self.table_name_for(path)
            logger.info(f"Writing {table_name} to the database...")
            try:
                rows = self.load_table(db_manager, path)
            except LoadError as e:
                if self.stop_on_error:
                    raise
                logger.error(str(e))
                failed.append(table_name)
                continue
            loaded.append((table_name, rows))

        if failed:
            raise LoadError(f"Fallback load failed for {len(failed)} table(s): {', '.join(failed)}")

        return loaded


class PostgresFallbackLoader(FallbackLoader):
    kind = DatabaseKind.POSTGRES
    insert_method = staticmethod(DatabaseManager.copy_from_stdin)


class MySqlFallbackLoader(FallbackLoader):
    kind = DatabaseKind.MYSQL
    insert_method = "multi"
    chunksize = 1000


class SqliteFallbackLoader(FallbackLoader):
    kind = DatabaseKind.SQLITE
    # sqlite caps bound parameters per statement, so no multi-row inserts
    insert_method = None


FALLBACK_LOADERS: Dict[DatabaseKind, Type[FallbackLoader]] = {
    DatabaseKind.POSTGRES: PostgresFallbackLoader,
    DatabaseKind.MYSQL: MySqlFallbackLoader,
    DatabaseKind.SQLITE: SqliteFallbackLoader,
}


def fallback_loader_for(
    kind: DatabaseKind,
    dialect: Optional[CsvDialect] = None,
    stop_on_error: bool = False,
) -> FallbackLoader:
    """Return the fallback loader for ``kind``.

    Raises:
        FallbackUnsupportedError: If no loader is registered for ``kind``
    """
    loader_class = FALLBACK_LOADERS.get(kind)
    if loader_class is None:
        raise FallbackUnsupportedError(f"Fallback load is not supported for {kind.value} databases")
    return loader_class(dialect=dialect, stop_on_error=stop_on_error)
