"""auth/ -- Authentication package for Furnishare.

Layer rule: auth/ imports stdlib, third-party libraries, and core/ only.
It does NOT import from api/, web/, or catalog/.
api/ imports from auth/, not the other way around.
"""
