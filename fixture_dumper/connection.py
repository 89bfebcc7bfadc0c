"""
Database connection management for MySQL Fixture Dumper.
"""

import logging
from typing import Optional, Union

import mysql.connector
from mysql.connector import Error as MySQLError

from .models import ConnectionConfig


class DatabaseConnection:
    """Manages MySQL database connections with context manager support."""

    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: Union[int, str],
        user: str,
        password: str,
        database: Optional[str] = None
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> "DatabaseConnection":
        """Create a connection for the database described by ``config``."""
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database
        )

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=int(self.port),
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.DEFAULT_CHARSET,
                use_unicode=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return results."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the current database."""
        results = self.execute_query("SHOW TABLES")
        return [row[0] for row in results]

    def get_table_checksum(self, table: str) -> Optional[str]:
        """Get the engine checksum of a table's content.

        Returns None when the server reports a NULL checksum, which is the
        case for tables that do not exist.
        """
        quoted = table.replace('`', '``')
        results = self.execute_query(f"CHECKSUM TABLE `{quoted}`")
        if not results or results[0][1] is None:
            return None
        return str(results[0][1])
