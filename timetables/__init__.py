"""timetables/ -- Per-user weekly class timetable (Mon-Fri, periods 1-5).

Layer rule: timetables/ may import from auth/ and core/. It does NOT import
from api/ or tasks/.
"""
