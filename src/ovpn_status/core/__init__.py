"""Status report parsing internals: field parsers, record schemas, section state machine and driver."""
