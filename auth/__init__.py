"""auth/ -- Session-token authentication package for Homeroom.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/, tasks/, or timetables/.
tasks/ and timetables/ import the CredentialService from auth/, not the
other way around.
"""
