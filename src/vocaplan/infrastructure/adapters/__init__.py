# Infrastructure Adapters Package
from .records_file import RecordStore, dump_store, load_store, parse_store, save_store

__all__ = ["RecordStore", "dump_store", "load_store", "parse_store", "save_store"]
