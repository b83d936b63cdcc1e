"""
Persistence adapters.

collection_store.py owns the on-disk JSON files; seeds.py provides the
default content used to create or repair them. Services depend on the store
rather than touching the files.
"""
