"""
Inline Editable - Content Table

SQLAlchemy table definition for content rows. The table name is configurable,
so the table is built per metadata object instead of declared once.
"""

from sqlalchemy import Column, MetaData, String, Table, Text

CONTENT_KEY_COLUMNS = ("namespace", "name", "locale")


def build_content_table(table_name: str = "inline_content", metadata: MetaData | None = None) -> Table:
    """
    Build the content table.

    Schema:
    - (namespace, name, locale) composite primary key, which is also the
      conflict target of every upsert
    - content as unbounded text

    Args:
        table_name: Name of the table
        metadata: MetaData to attach the table to (a fresh one if omitted)

    Returns:
        The table object
    """
    metadata = metadata if metadata is not None else MetaData()
    return Table(
        table_name,
        metadata,
        Column("namespace", String(191), primary_key=True),
        Column("name", String(191), primary_key=True),
        Column("locale", String(32), primary_key=True),
        Column("content", Text, nullable=False, default=""),
    )
