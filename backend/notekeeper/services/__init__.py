# Services package init
"""
Notekeeper Backend: Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and the store (persistence).
Why:   Routes handle HTTP, services handle business rules, the store handles SQL.

Service Inventory:
    - NoteService: Content validation, title normalization, display titles,
      and not-found handling for the notes resource
"""
