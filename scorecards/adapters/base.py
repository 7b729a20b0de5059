"""Abstract base adapter for reading input tables from files."""

from abc import ABC, abstractmethod


class BaseAdapter(ABC):
    @abstractmethod
    def parse(self, data_path: str) -> list:
        """Read a table file and return its rows.

        Each row is a list of raw cell values, header row first. Rows are
        returned as found: a row may hold one ';'-packed string cell, and
        rows may differ in length. JSON summaries may instead return a
        dict of named settings.
        """
        pass
