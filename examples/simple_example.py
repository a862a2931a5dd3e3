import sys
from MolBuilder import Peptide, XyzIO

"""
Simple example script demonstrating how to use the MolBuilder library.
Usage: python simple_example.py seq_file output_file_name
"""

seq_file = sys.argv[1]
out_file = sys.argv[2]

with open(seq_file, 'r') as f:
    sequence = f.readlines()[0]
    sequence = sequence.strip()

chain = Peptide.read_aminoacid(sequence[0])
for code in sequence[1:]:
    aa = Peptide.read_aminoacid(code)
    chain.append_amino_acid(aa)

# the last residue can be moved on its own
last = chain.find_aa_last()
print(f"{len(chain)} atoms, {len(chain.bonds())} bonds, last residue has {len(last)} atoms")

XyzIO.write_xyz_file(chain, out_file)
