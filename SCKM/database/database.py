import sqlite3
from pathlib import Path
from typing import Dict, Union


class Database:
    """Per-user key/value preference store backed by SQLite"""

    def __init__(self, db_path: Union[str, Path]):
        self.__conn = sqlite3.connect(str(db_path))
        self.__cursor = self.__conn.cursor()
        self.create_tables()

    def __enter__(self):
        """
        Lets you write:     with Database(path) as db:
        and receive a ready-to-use Database instance.
        """
        return self

    def __exit__(self, exc_type, exc, tb):
        """
        Runs automatically when the with-block ends.

        - No error (exc_type is None)  -> commit the outstanding work
        - Error happened               -> roll back so the DB stays clean
        - Always                       -> close the connection to release the file handle
        """
        if exc_type is None:
            self.__conn.commit()
        else:
            self.__conn.rollback()

        self.__conn.close()
        return False

    def create_tables(self):
        self.__cursor.execute('''

        CREATE TABLE IF NOT EXISTS preferences(
            pref_key TEXT PRIMARY KEY,
            pref_value TEXT NOT NULL
        )
        ''')
        self.__conn.commit()

    def put(self, key: str, value: str) -> None:
        """
        Insert or overwrite a preference.
        Args:
            key (str): Preference name.
            value (str): Preference value, stored as text.
        """
        self.__cursor.execute(
            "INSERT INTO preferences (pref_key, pref_value) VALUES (?, ?) "
            "ON CONFLICT(pref_key) DO UPDATE SET pref_value = excluded.pref_value",
            (key, value)
        )

    def read_all(self) -> Dict[str, str]:
        """
        Reads every stored preference.
        Returns:
            dict: pref_key -> pref_value
        """
        self.__cursor.execute("SELECT pref_key, pref_value FROM preferences")
        return dict(self.__cursor.fetchall())
