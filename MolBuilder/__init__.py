"""
MolBuilder models molecules as atoms connected by bonds inferred from 3-D coordinates.

Main Functions:
- detect bonds from per-element covalent radii
- move, merge and trim molecules while keeping the bond graph consistent
- build peptide chains from amino acid fragments
- read XYZ and PDB files, write XYZ files
"""

__version__ = "1.0.0"
__author__ = "MolBuilder developers"
__license__ = 'MIT'

__all__ = [
    '__version__',
    '__author__',
    '__license__',
]
