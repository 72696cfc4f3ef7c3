"""
Application use cases.

Each use case runs inside one unit of work: load a snapshot, call the
resolution engine, write back whole collections. CLI commands and HTTP
endpoints call functions from here.
"""
