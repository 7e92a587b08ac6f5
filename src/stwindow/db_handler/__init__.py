from stwindow.db_handler.abstract import AbstractDBHandler


def get_db_handler(db_type: str, **kwargs) -> AbstractDBHandler:
    """
    Factory function to create database handlers.

    Args:
        db_type: Type of database ('postgres', 'sqlite')
        **kwargs: Arguments to pass to the handler constructor

    Returns:
        An instance of the requested database handler
    """
    if db_type.lower() in ("postgres", "postgresql"):
        from stwindow.db_handler.postgres import PostgresDBHandler

        return PostgresDBHandler(**kwargs)
    if db_type.lower() == "sqlite":
        from stwindow.db_handler.sqlite import SQLiteDBHandler

        return SQLiteDBHandler(**kwargs)

    supported = ["postgres", "sqlite"]
    raise ValueError(f"Unsupported database type: {db_type}. Options: {', '.join(supported)}")
