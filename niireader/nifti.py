"""@package docstring
Identify, decompress and slice NIFTI-1/NIFTI-2 byte streams

    import niireader as nr

    if nr.iscompressed(data):
        data = nr.decompress(data)
    hdr = nr.readheader(data)
    img = nr.readimage(hdr, data)
    rgba = nr.convert2rgba(hdr, data)

Copyright (c) 2019-2026 Qianqian Fang <q.fang at neu.edu>
"""

__all__ = [
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
]

##====================================================================================
## dependent libraries
##====================================================================================

import struct
import zlib
import warnings

import numpy as np

from .niiheader import (
    NIFTI1,
    NIFTI2,
    NiftiFormatError,
    NiftiFormatWarning,
    DecompressionError,
    OutOfRangeError,
    niidatatype,
    STANDARD_HEADER_SIZE,
    GUNZIP_MAGIC_COOKIE1,
    GUNZIP_MAGIC_COOKIE2,
    EXTENSION_HEADER_SIZE,
    TYPE_RGB24,
)

##====================================================================================
## format detection
##====================================================================================


def _hasmagic(data, headerclass):
    if data is None or len(data) < STANDARD_HEADER_SIZE:
        return False
    location = headerclass.MAGIC_NUMBER_LOCATION
    magic = headerclass.MAGIC_NUMBER
    return bytes(data[location : location + len(magic)]) == magic


def isnifti1(data):
    """Return True if the byte stream starts with a NIFTI-1 header"""
    return _hasmagic(data, NIFTI1)


def isnifti2(data):
    """Return True if the byte stream starts with a NIFTI-2 header

    The minimum length checked is the NIFTI-1 header size.
    """
    return _hasmagic(data, NIFTI2)


def isnifti(data):
    return isnifti1(data) or isnifti2(data)


def niitype(data):
    """Return 'nifti1', 'nifti2' or None for an uncompressed byte stream"""
    if isnifti1(data):
        return "nifti1"
    if isnifti2(data):
        return "nifti2"
    return None


def iscompressed(data, strict=True):
    """
    Return True if the byte stream is gzip-compressed.

    With strict=True both magic bytes (0x1f 0x8b) must match; strict=False
    accepts a match of either byte alone.
    """
    if data is None or len(data) == 0:
        return False

    if strict:
        return (
            len(data) >= 2
            and data[0] == GUNZIP_MAGIC_COOKIE1
            and data[1] == GUNZIP_MAGIC_COOKIE2
        )

    if data[0] == GUNZIP_MAGIC_COOKIE1:
        return True
    return len(data) >= 2 and data[1] == GUNZIP_MAGIC_COOKIE2


def decompress(data):
    """Inflate a complete gzip (or zlib) stream and return the bytes"""
    try:
        return zlib.decompress(bytes(data), zlib.MAX_WBITS | 32)
    except zlib.error as e:
        raise DecompressionError(
            "unable to decompress the NIFTI stream: {}".format(e)
        ) from e


##====================================================================================
## header dispatch
##====================================================================================


def readheader(data):
    """
    Decode the NIFTI-1 or NIFTI-2 header of a (possibly gzipped) byte stream

    Returns None, with a NiftiFormatWarning, if neither magic number is found.
    """
    if iscompressed(data):
        data = decompress(data)

    if isnifti1(data):
        header = NIFTI1()
    elif isnifti2(data):
        header = NIFTI2()
    else:
        warnings.warn("That file does not appear to be NIFTI!", NiftiFormatWarning)
        return None

    header.readheader(data)
    return header


##====================================================================================
## voxel and extension slicing
##====================================================================================


def _slice(data, start, stop, strict, what):
    if strict and (start < 0 or stop < start or stop > len(data)):
        raise OutOfRangeError(
            "{} bytes [{}, {}) lie outside of the {}-byte buffer".format(
                what, start, stop, len(data)
            )
        )
    return data[start:stop]


def _volumecount(dims):
    return max(dims[4], 1) * max(dims[5], 1)


def imagesize(header):
    """Return the voxel buffer length in bytes derived from the header geometry"""
    dims = header.dims
    return (
        dims[1] * dims[2] * dims[3] * _volumecount(dims) * (header.numbitspervoxel // 8)
    )


def readimage(header, data, strict=True):
    """
    Return the raw voxel bytes of an uncompressed byte stream

    Parameters
    ----------
    header : NIFTI1 or NIFTI2
    data : bytes-like, the decompressed stream the header was read from
    strict : if True (default), raise OutOfRangeError when the header
        geometry extends past the end of data; otherwise return the
        truncated slice

    Returns
    -------
    a slice of data, dims[1]*dims[2]*dims[3]*dims[4]*dims[5]*bitpix/8 bytes long
    """
    start = header.vox_offset
    return _slice(data, start, start + imagesize(header), strict, "image")


def readvolume(header, data):
    """
    Return the voxel data as a numpy array shaped by the header geometry

    The array is laid out in Fortran (x-fastest) order; RGB24 and RGBA32
    images get a trailing axis of 3 or 4 channels. No scaling is applied.
    """
    if header.datatypecode not in niidatatype:
        raise NiftiFormatError(
            "unsupported NIFTI datatype code {}".format(header.datatypecode)
        )

    dtype_str, nbytes, channels = niidatatype[header.datatypecode]
    dtype = np.dtype(dtype_str).newbyteorder(header.byteorder)

    dims = header.dims
    ndim = min(max(dims[0], 1), 5)
    shape = tuple(max(d, 1) for d in dims[1 : ndim + 1])

    raw = readimage(header, data)
    if int(np.prod(shape)) * nbytes * channels != len(raw):
        raise NiftiFormatError(
            "image size {} does not match dims {} and datatype {}".format(
                len(raw), shape, header.datatypecode
            )
        )

    img = np.frombuffer(bytes(raw), dtype=dtype)
    if channels > 1:
        return np.moveaxis(img.reshape((channels,) + shape, order="F"), 0, -1)
    return img.reshape(shape, order="F")


def hasextension(header):
    return header.extensionflag[0] != 0


def readextension(header, data, strict=True):
    """Return the first extension block, including its 8-byte esize/ecode header"""
    loc = header.getextensionlocation()
    return _slice(data, loc, loc + header.extensionsize, strict, "extension")


def readextensiondata(header, data, strict=True):
    """Return the first extension block without its leading and trailing 8 bytes"""
    loc = header.getextensionlocation()
    return _slice(
        data,
        loc + EXTENSION_HEADER_SIZE,
        loc + header.extensionsize - EXTENSION_HEADER_SIZE,
        strict,
        "extension data",
    )


def iterextensions(header, data):
    """
    Iterate over all extension blocks between the header and the voxel data

    Yields (ecode, payload) pairs. Iteration stops at the first block whose
    esize is smaller than 8 or runs past vox_offset.
    """
    if not hasextension(header):
        return

    pos = header.getextensionlocation()
    end = len(data)
    if header.vox_offset > pos:
        end = min(end, header.vox_offset)

    while pos + EXTENSION_HEADER_SIZE <= end:
        esize, ecode = struct.unpack(
            header.byteorder + "ii", bytes(data[pos : pos + EXTENSION_HEADER_SIZE])
        )
        if esize < EXTENSION_HEADER_SIZE or pos + esize > end:
            break
        yield ecode, bytes(data[pos + EXTENSION_HEADER_SIZE : pos + esize])
        pos += esize


##====================================================================================
## RGB24 to RGBA conversion
##====================================================================================


def isplanar(header, data):
    """
    Guess whether RGB24 voxels are stored as planes or as packed triples

    Compares, over the middle slice, the byte differences one planar row
    (dims[1] bytes) apart with those one packed row (dims[1]*3 bytes) apart;
    smooth images change least along the stride that matches their layout.
    """
    dims = header.dims
    if dims[2] < 2:
        return False

    incplanar = dims[1]
    incpacked = dims[1] * 3
    byteslice = incpacked * dims[2]

    rgb = np.frombuffer(bytes(readimage(header, data, strict=False)), dtype=np.uint8)

    pos = (dims[3] // 2) * byteslice
    posend = min(pos + byteslice - incpacked, rgb.size - incpacked)
    if posend <= pos:
        return False

    span = posend - pos
    window = rgb[pos : posend + incpacked].astype(np.int64)
    base = window[:span]
    dxplanar = np.abs(base - window[incplanar : incplanar + span]).sum()
    dxpacked = np.abs(base - window[incpacked : incpacked + span]).sum()

    return bool(dxplanar < dxpacked)


def convert2rgba(header, data):
    """
    Convert RGB24 voxel data to a packed RGBA byte buffer

    Any datatype other than RGB24 is returned unchanged (the very same
    object). The alpha channel is estimated as green // 2.

    Returns
    -------
    rgba : bytes, nx*ny*nz*nvol*4 bytes with nvol = dims[4]*dims[5]
    """
    if header.datatypecode != TYPE_RGB24:
        return data

    dims = header.dims
    nx, ny, nz = dims[1], dims[2], dims[3]
    nvol = _volumecount(dims)
    voxcount = nx * ny * nz * nvol

    start = header.vox_offset
    rgb = np.frombuffer(
        bytes(_slice(data, start, start + voxcount * 3, True, "RGB image")),
        dtype=np.uint8,
    )

    if isplanar(header, data):
        # each slice of each volume holds an R, a G and a B plane
        rgb = rgb.reshape(nvol * nz, 3, nx * ny).transpose(0, 2, 1)
    rgb = rgb.reshape(voxcount, 3)

    rgba = np.empty((voxcount, 4), dtype=np.uint8)
    rgba[:, :3] = rgb
    rgba[:, 3] = rgb[:, 1] // 2

    return rgba.tobytes()
