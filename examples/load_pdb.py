import sys
from MolBuilder import PdbIO, XyzIO

"""
Read every model of a PDB file and write each one as an XYZ file.
Usage: python load_pdb.py structure.pdb
"""

pdb_file = sys.argv[1]

for i, mol in enumerate(PdbIO.read_pdb_file(pdb_file), 1):
    print(f"{mol.id}: {len(mol)} atoms, {len(mol.bonds())} bonds")
    mol.descr = mol.id
    XyzIO.write_xyz_file(mol, f"model_{i}.xyz")
