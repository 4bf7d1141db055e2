# Routes package init
"""
Notekeeper Backend: API Routes Package
=======================================

Route Inventory:
    - notes.py:   POST/GET /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health (service health check)

Routes are thin: they extract request data, call NoteService, and let the
global exception handlers in main.py turn errors into responses.
"""
