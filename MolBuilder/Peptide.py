"""
Peptide chain assembly.

Amino acid fragments are read from XYZ files and spliced into a chain one at a
time: the chain loses the hydroxyl of its C-terminal carboxyl group, the new
residue loses one hydrogen of its N-terminal amino group, and the two are
joined by a peptide bond.
"""

import argparse
import sys
from collections import namedtuple
from pathlib import Path

import numpy as np

from . import Transform
from .Atom import Element
from .XyzIO import read_xyz_file, write_xyz_file
from .utils import MoleculeError, get_aminoacid_directory

C, H, N, O = Element.C, Element.H, Element.N, Element.O

# Single letter code to amino acid name mapping
AA_NAMES = {
    'A': 'Alanine', 'C': 'Cysteine', 'D': 'Aspartic_Acid', 'E': 'Glutamic_Acid',
    'F': 'Phenylalanine', 'G': 'Glycine', 'H': 'Histidine', 'I': 'Isoleucine',
    'K': 'Lysine', 'L': 'Leucine', 'M': 'Methionine', 'N': 'Asparagine',
    'P': 'Proline', 'Q': 'Glutamine', 'R': 'Arginine', 'S': 'Serine',
    'T': 'Threonine', 'V': 'Valine', 'W': 'Tryptophan', 'Y': 'Tyrosine'
}

NTerminus = namedtuple('NTerminus', ['nitrogen', 'alpha_carbon', 'hydrogen'])
CTerminus = namedtuple('CTerminus', ['alpha_carbon', 'carbon', 'oxygen',
                                     'hydroxyl_oxygen', 'hydroxyl_hydrogen'])


def _is_carboxyl(atom):
    return atom.element == C and atom.is_bonds(C, 1, O, 2)


def _is_carbonyl(atom):
    # backbone carbon already taking part in a peptide bond
    return atom.element == C and atom.is_bonds(C, 1, N, 1, O, 1)


def _next_to_carboxyl(alpha):
    return any(_is_carboxyl(c) or _is_carbonyl(c) for c in alpha.filter_bonds(C))


def find_aa_nterm(mol):
    """Find the free amino group of the first residue: N(-H)(-H)-CA or, for proline, N(-H)(-CD)-CA."""
    for a in mol.atoms:
        if a.element != N:
            continue
        if a.is_bonds(C, 1, H, 2):
            alpha = a.filter_bonds1(C)
            if _next_to_carboxyl(alpha):
                return NTerminus(a, alpha, a.filter_bonds(H)[0])
        elif a.is_bonds(C, 2, H, 1):
            carbons = a.filter_bonds(C)
            if any(_is_carbonyl(c) for c in carbons):
                continue  # peptide bond nitrogen
            for alpha in carbons:
                if _next_to_carboxyl(alpha):
                    return NTerminus(a, alpha, a.filter_bonds1(H))
    raise MoleculeError(f"No amino acid N-terminus found in the molecule '{mol.id or mol.descr}'")


def find_aa_cterm(mol):
    """Find the carboxyl group of the last residue: CA-C(=O)-O-H, with CA bonded to N."""
    for a in reversed(mol.atoms):
        if not _is_carboxyl(a):
            continue
        alpha = a.filter_bonds1(C)
        if not alpha.filter_bonds(N):
            continue  # side chain acid group
        oxygen = hydroxyl = None
        for o in a.filter_bonds(O):
            if o.is_bonds(C, 1, H, 1):
                hydroxyl = o
            elif o.is_bonds(C, 1):
                oxygen = o
        if oxygen is None or hydroxyl is None:
            continue
        return CTerminus(alpha, a, oxygen, hydroxyl, hydroxyl.filter_bonds1(H))
    raise MoleculeError(f"No amino acid C-terminus found in the molecule '{mol.id or mol.descr}'")


def find_aa_last(mol):
    """Atoms of the C-terminal residue, bounded by the last peptide bond."""
    cterm = find_aa_cterm(mol)
    nitrogen = cterm.alpha_carbon.filter_bonds1(N)
    boundary = [c for c in nitrogen.filter_bonds(C) if _is_carbonyl(c)]
    if len(boundary) > 1:
        raise MoleculeError("Residue nitrogen is bonded to more than one carbonyl carbon")

    blocked = {(nitrogen.handle, c.handle) for c in boundary}
    seen = {cterm.alpha_carbon.handle}
    stack = [cterm.alpha_carbon]
    while stack:
        a = stack.pop()
        for b in a.bonds:
            if b.handle in seen or (a.handle, b.handle) in blocked:
                continue
            seen.add(b.handle)
            stack.append(b)
    return [a for a in mol.atoms if a.handle in seen]


def append_amino_acid(chain, aa):
    """
    Append the amino acid fragment aa to the C-terminus of chain.

    aa is moved rigidly so that its amino nitrogen takes the place of the
    chain's hydroxyl oxygen and the N-H bond being removed points along the
    new C-N bond. aa is altered: it is moved and loses the capping hydrogen.
    """
    cterm = find_aa_cterm(chain)
    nterm = find_aa_nterm(aa)

    # orient and position the fragment
    rot = Transform.rotation_between(nterm.hydrogen.position - nterm.nitrogen.position,
                                     cterm.carbon.position - cterm.hydroxyl_oxygen.position)
    pivot = nterm.nitrogen.position
    aa.center_at(pivot)
    aa.apply_matrix(Transform.rotate(rot))
    aa.center_at(-cterm.hydroxyl_oxygen.position)

    # strip the capping atoms
    chain.remove_at_end(cterm.hydroxyl_hydrogen)
    chain.remove_at_end(cterm.hydroxyl_oxygen)
    aa.remove_at_begin(nterm.hydrogen)

    mapping = chain._splice(aa)
    cterm.carbon.link(mapping[nterm.nitrogen.handle])


def read_aminoacid(code, library=None):
    if code not in AA_NAMES:
        raise MoleculeError(f"Amino acid '{code}' is unknown")
    library = Path(library or get_aminoacid_directory())
    return read_xyz_file(str(library / f"L-{AA_NAMES[code]}.xyz"))


def combine(sequence, library=None, verbose=False):
    """Build a peptide chain from one-letter amino acid codes."""
    chain = None
    for i, code in enumerate(sequence.upper()):
        aa = read_aminoacid(code, library)
        if i == 0:
            chain = aa
        else:
            chain.append_amino_acid(aa)
        if verbose:
            print(f"  residue {i + 1}: {AA_NAMES[code]}, chain has {len(chain)} atoms")
    if chain is None:
        raise MoleculeError("Empty amino acid sequence")
    chain.descr = f"peptide {sequence.upper()}"
    return chain


def main():
    "Command-line interface to build peptide from sequence."
    parser = argparse.ArgumentParser(
        description='Build a peptide chain from sequence: molbuilder name sequence, output: name.xyz.')

    parser.add_argument('name', type=str,
                        help='xyz file name, output will be name.xyz')
    parser.add_argument('sequence', type=str,
                        help='Amino acid sequence (single-letter codes, e.g., GAG)')
    parser.add_argument('--library', type=str, default=None,
                        help='Directory with L-<Name>.xyz amino acid fragments')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress output')

    args = parser.parse_args()
    verbose = not args.quiet

    try:
        chain = combine(args.sequence, library=args.library, verbose=verbose)
        output_file = f"{args.name}.xyz"
        write_xyz_file(chain, output_file)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

    if verbose:
        center = np.mean(chain.positions, axis=0)
        print(f"Peptide chain built: {len(args.sequence)} residues, {len(chain)} atoms, "
              f"{len(chain.bonds())} bonds")
        print(f"Geometric center: {center[0]:.3f} {center[1]:.3f} {center[2]:.3f}")
        print(f"Output written to: {output_file}")


if __name__ == "__main__":
    main()
