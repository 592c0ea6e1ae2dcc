"""tasks/ -- Per-user dated task list.

Layer rule: tasks/ may import from auth/ and core/. It does NOT import
from api/ or timetables/.
"""
