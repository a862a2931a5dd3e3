from pathlib import Path


class MoleculeError(ValueError):
    """Raised for unreadable input, unknown elements and broken bond graphs."""


def get_aminoacid_directory():
    """Get the path to the directory holding the amino acid fragments."""
    module_dir = Path(__file__).parent
    aa_dir = module_dir / 'aminoacids'

    if not aa_dir.exists():
        raise FileNotFoundError(
            f"Amino acid directory not found at {aa_dir}. "
            "Please ensure fragments are in MolBuilder/MolBuilder/aminoacids/"
        )

    return str(aa_dir)


def open_or_fail(fname, mode='r'):
    """Open a file, turning OS errors into MoleculeError."""
    try:
        return open(fname, mode)
    except OSError as e:
        raise MoleculeError(f"Unable to open the file '{fname}': {e.strerror}") from e
