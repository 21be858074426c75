"""Search engine layer — Drivers that sync records to a search backend.

Built-in engines:
  - algolia: Algolia hosted search (official ``algoliasearch`` v4 client)
  - null: Discards writes and returns empty results

Implement ``SearchEngine`` to connect your own search backend.
"""
