"""jsonds: JSON / JSON-Lines data store connector.

Discovers JSON and JSON-Lines files, decodes each line into a record,
enriches it with script expressions and hands it to an indexing sink.
"""

__version__ = "0.1.0"
