"""@package docstring
File IO to load NIFTI-1/2 (.nii, .nii.gz) files

Copyright (c) 2019-2026 Qianqian Fang <q.fang at neu.edu>
"""

__all__ = ["loadnifti", "readniibytes"]

##====================================================================================
## dependent libraries
##====================================================================================

import re

from .niiheader import NiftiFormatError
from .nifti import (
    iscompressed,
    decompress,
    readheader,
    readvolume,
    iterextensions,
)


def readniibytes(filename):
    """
    Read a .nii or .nii.gz file and return its uncompressed bytes
    """
    if not re.search(r"\.[Nn][Ii][Ii](\.[Gg][Zz])*$", filename):
        raise ValueError("file must be a NIfTI (.nii/.nii.gz) data file")

    with open(filename, "rb") as fid:
        data = fid.read()

    if iscompressed(data):
        data = decompress(data)

    return data


def loadnifti(filename):
    """
    Load a NIFTI-1/2 file into a dict

    Parameters:
    filename (str): a .nii or .nii.gz file

    Returns:
    nii (dict): with the below keys
        nii['hdr'] - the decoded NIFTI1 or NIFTI2 header object
        nii['img'] - numpy array of the voxel data, see readvolume()
        nii['extension'] - list of (ecode, payload bytes) extension blocks
    """
    data = readniibytes(filename)

    header = readheader(data)
    if header is None:
        raise NiftiFormatError("{} is not a NIFTI-1/2 file".format(filename))

    nii = {
        "hdr": header,
        "img": readvolume(header, data),
        "extension": list(iterextensions(header, data)),
    }
    return nii
