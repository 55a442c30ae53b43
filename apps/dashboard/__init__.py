# apps/dashboard/__init__.py

"""
Dashboard - client-side state and rendering engine

Holds the project cache, the active status filter and the derived
statistics, talks to the JSON API and turns state into view models that
the presenter renders.

There is no optimistic update and no diffing: every mutation is followed by
a full refetch that replaces the cache. Overlapping refreshes resolve
last-wins since requests carry no sequence number.
"""
