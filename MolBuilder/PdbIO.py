"""
Protein structure (PDB) files, parsed with Biopython.
Each model of the file becomes one molecule.
"""

from Bio.PDB import PDBParser

from .Atom import Atom, Element
from .Molecule import Molecule
from .Vec3 import Vec3
from .utils import MoleculeError, open_or_fail

# Biopython element symbols we can bond
PDB_ELEMENTS = {
    'C': Element.C,
    'N': Element.N,
    'H': Element.H,
    'O': Element.O,
    'S': Element.S,
}


def read_pdb_file(fname):
    """Read all models of a PDB file, returns a list of molecules."""
    parser = PDBParser(QUIET=True)
    with open_or_fail(fname) as f:
        try:
            structure = parser.get_structure(fname, f)
        except ValueError as e:
            raise MoleculeError(f"Unable to parse the PDB file '{fname}': {e}") from e

    models = list(structure)
    if not models:
        raise MoleculeError(f"The PDB file '{fname}' doesn't have any molecules in it")

    res = []
    for m, model in enumerate(models):
        molecule = Molecule('')
        for chain in model:
            for atom in chain.get_atoms():
                if atom.element not in PDB_ELEMENTS:
                    raise MoleculeError(
                        f"Unknown atom type '{atom.element}' in the PDB file '{fname}'")
                x, y, z = (float(c) for c in atom.coord)
                molecule.add_atom(Atom(PDB_ELEMENTS[atom.element], Vec3(x, y, z)))
        molecule.detect_bonds()
        molecule.set_id(f"{fname}#{m + 1}")
        res.append(molecule)
    return res
