"""Database layer: engine ownership, transactions and schema initialization."""
