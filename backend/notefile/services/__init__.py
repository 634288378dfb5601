# Services package init
"""
Notefile Backend — Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and the NoteStore.
How:   Services receive the store, apply the lock/load/mutate/save template,
       and return domain objects or raise application exceptions.

Service Inventory:
    - NoteService: list, get, create, update and delete over the notes file
"""
