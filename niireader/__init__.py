"""niireader - identify, decompress and decode NIFTI-1/NIFTI-2 volume files

This module detects NIFTI-1 and NIFTI-2 byte streams by their magic numbers,
inflates gzip-compressed (.nii.gz) input, decodes the header and exposes the
voxel buffer and the header extensions as byte ranges.

    import niireader as nr

    hdr = nr.readheader(data)
    img = nr.readimage(hdr, data)
    ext = nr.readextensiondata(hdr, data) if nr.hasextension(hdr) else None

RGB24 images can be expanded to a packed RGBA buffer with ``convert2rgba``,
which detects whether the color channels are stored as planes or as
interleaved triples.
"""

from .niiheader import (
    NIFTIHeader,
    NIFTI1,
    NIFTI2,
    NiftiError,
    NiftiFormatError,
    NiftiFormatWarning,
    DecompressionError,
    OutOfRangeError,
    niiformat,
    niicodemap,
    memmapstream,
    nifticreate,
    niidatatype,
    STANDARD_HEADER_SIZE,
    NIFTI1_MAGIC_NUMBER,
    NIFTI1_MAGIC_NUMBER_LOCATION,
    NIFTI2_HEADER_SIZE,
    NIFTI2_MAGIC_NUMBER,
    NIFTI2_MAGIC_NUMBER_LOCATION,
    GUNZIP_MAGIC_COOKIE1,
    GUNZIP_MAGIC_COOKIE2,
    EXTENSION_HEADER_SIZE,
    TYPE_RGB24,
    TYPE_RGBA32,
)
from .nifti import (
    isnifti1,
    isnifti2,
    isnifti,
    niitype,
    iscompressed,
    decompress,
    readheader,
    hasextension,
    imagesize,
    readimage,
    readvolume,
    readextension,
    readextensiondata,
    iterextensions,
    isplanar,
    convert2rgba,
)
from .niifile import loadnifti, readniibytes

__version__ = "0.1.0"
__all__ = [
    "NIFTIHeader",
    "NIFTI1",
    "NIFTI2",
    "NiftiError",
    "NiftiFormatError",
    "NiftiFormatWarning",
    "DecompressionError",
    "OutOfRangeError",
    "niiformat",
    "niicodemap",
    "memmapstream",
    "nifticreate",
    "niidatatype",
    "STANDARD_HEADER_SIZE",
    "NIFTI1_MAGIC_NUMBER",
    "NIFTI1_MAGIC_NUMBER_LOCATION",
    "NIFTI2_HEADER_SIZE",
    "NIFTI2_MAGIC_NUMBER",
    "NIFTI2_MAGIC_NUMBER_LOCATION",
    "GUNZIP_MAGIC_COOKIE1",
    "GUNZIP_MAGIC_COOKIE2",
    "EXTENSION_HEADER_SIZE",
    "TYPE_RGB24",
    "TYPE_RGBA32",
    "isnifti1",
    "isnifti2",
    "isnifti",
    "niitype",
    "iscompressed",
    "decompress",
    "readheader",
    "hasextension",
    "imagesize",
    "readimage",
    "readvolume",
    "readextension",
    "readextensiondata",
    "iterextensions",
    "isplanar",
    "convert2rgba",
    "loadnifti",
    "readniibytes",
]
__license__ = """Apache license 2.0, Copyright (c) 2019-2026 Qianqian Fang"""
