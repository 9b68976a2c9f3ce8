"""@package docstring
Decode NIFTI-1 and NIFTI-2 headers from a byte stream

Copyright (c) 2019-2026 Qianqian Fang <q.fang at neu.edu>
"""

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
]

##====================================================================================
## dependent libraries
##====================================================================================

import struct

import numpy as np
from typing import Union
from collections import defaultdict

##====================================================================================
## global variables
##====================================================================================

STANDARD_HEADER_SIZE = 348
NIFTI1_MAGIC_NUMBER = b"n+1"
NIFTI1_MAGIC_NUMBER_LOCATION = 344

NIFTI2_HEADER_SIZE = 540
NIFTI2_MAGIC_NUMBER = b"n+2"
NIFTI2_MAGIC_NUMBER_LOCATION = 4

GUNZIP_MAGIC_COOKIE1 = 31
GUNZIP_MAGIC_COOKIE2 = 139

EXTENSION_HEADER_SIZE = 8

TYPE_RGB24 = 128
TYPE_RGBA32 = 2304

""" @brief NIFTI datatype code -> [numpy type, bytes per component, components per voxel]
"""

niidatatype = {
    2: ["uint8", 1, 1],  # unsigned char (8 bits/voxel)
    4: ["int16", 2, 1],  # signed short (16 bits/voxel)
    8: ["int32", 4, 1],  # signed int (32 bits/voxel)
    16: ["float32", 4, 1],  # float (32 bits/voxel)
    32: ["complex64", 8, 1],  # complex (64 bits/voxel)
    64: ["float64", 8, 1],  # double (64 bits/voxel)
    128: ["uint8", 1, 3],  # RGB triple (24 bits/voxel)
    256: ["int8", 1, 1],  # signed char (8 bits)
    512: ["uint16", 2, 1],  # unsigned short (16 bits)
    768: ["uint32", 4, 1],  # unsigned int (32 bits)
    1024: ["int64", 8, 1],  # long long (64 bits)
    1280: ["uint64", 8, 1],  # unsigned long long (64 bits)
    1792: ["complex128", 16, 1],  # double pair (128 bits)
    2304: ["uint8", 1, 4],  # 4 byte RGBA (32 bits/voxel)
}

##====================================================================================
## exceptions
##====================================================================================


class NiftiError(ValueError):
    """Base class of the errors raised while decoding NIFTI data"""


class NiftiFormatError(NiftiError):
    """The byte stream is not a decodable NIFTI-1/2 header"""


class DecompressionError(NiftiError):
    """A gzip-compressed stream could not be inflated"""


class OutOfRangeError(NiftiError, IndexError):
    """A byte range computed from the header lies outside of the buffer"""


class NiftiFormatWarning(UserWarning):
    """Emitted when a buffer carries neither the NIFTI-1 nor the NIFTI-2 magic"""


##====================================================================================
## header layouts
##====================================================================================


def niiformat(format):
    """
    Return the on-disk field layout of a NIFTI-1 or NIFTI-2 header.

    Each entry is [numpy type, shape, field name]; the trailing 4-byte
    "extension" field follows the standard header (348 or 540 bytes).
    """
    header = {
        "nifti1": [
            ["int32", [1], "sizeof_hdr"],  # !< MUST be 348
            ["int8", [10], "data_type"],  # !< ++UNUSED++
            ["int8", [18], "db_name"],  # !< ++UNUSED++
            ["int32", [1], "extents"],  # !< ++UNUSED++
            ["int16", [1], "session_error"],  # !< ++UNUSED++
            ["int8", [1], "regular"],  # !< ++UNUSED++
            ["int8", [1], "dim_info"],  # !< MRI slice ordering.
            ["int16", [8], "dim"],  # !< Data array dimensions.
            ["single", [1], "intent_p1"],  # !< 1st intent parameter.
            ["single", [1], "intent_p2"],  # !< 2nd intent parameter.
            ["single", [1], "intent_p3"],  # !< 3rd intent parameter.
            ["int16", [1], "intent_code"],  # !< NIFTI_INTENT_* code.
            ["int16", [1], "datatype"],  # !< Defines data type!
            ["int16", [1], "bitpix"],  # !< Number bits/voxel.
            ["int16", [1], "slice_start"],  # !< First slice index.
            ["single", [8], "pixdim"],  # !< Grid spacings.
            ["single", [1], "vox_offset"],  # !< Offset into .nii file
            ["single", [1], "scl_slope"],  # !< Data scaling: slope.
            ["single", [1], "scl_inter"],  # !< Data scaling: offset.
            ["int16", [1], "slice_end"],  # !< Last slice index.
            ["int8", [1], "slice_code"],  # !< Slice timing order.
            ["int8", [1], "xyzt_units"],  # !< Units of pixdim[1..4]
            ["single", [1], "cal_max"],  # !< Max display intensity
            ["single", [1], "cal_min"],  # !< Min display intensity
            ["single", [1], "slice_duration"],  # !< Time for 1 slice.
            ["single", [1], "toffset"],  # !< Time axis shift.
            ["int32", [1], "glmax"],  # !< ++UNUSED++
            ["int32", [1], "glmin"],  # !< ++UNUSED++
            ["int8", [80], "descrip"],  # !< any text you like.
            ["int8", [24], "aux_file"],  # !< auxiliary filename.
            ["int16", [1], "qform_code"],  # !< NIFTI_XFORM_* code.
            ["int16", [1], "sform_code"],  # !< NIFTI_XFORM_* code.
            ["single", [1], "quatern_b"],  # !< Quaternion b param.
            ["single", [1], "quatern_c"],  # !< Quaternion c param.
            ["single", [1], "quatern_d"],  # !< Quaternion d param.
            ["single", [1], "qoffset_x"],  # !< Quaternion x shift.
            ["single", [1], "qoffset_y"],  # !< Quaternion y shift.
            ["single", [1], "qoffset_z"],  # !< Quaternion z shift.
            ["single", [4], "srow_x"],  # !< 1st row affine transform.
            ["single", [4], "srow_y"],  # !< 2nd row affine transform.
            ["single", [4], "srow_z"],  # !< 3rd row affine transform.
            ["int8", [16], "intent_name"],  # !< 'name' or meaning of data.
            ["int8", [4], "magic"],  # !< MUST be "ni1\0" or "n+1\0".
            ["int8", [4], "extension"],  # !< header extension
        ],
        "nifti2": [
            ["int32", [1], "sizeof_hdr"],  # !< MUST be 540
            ["int8", [8], "magic"],  # !< MUST be "ni2\0" or "n+2\0".
            ["int16", [1], "datatype"],  # !< Defines data type!
            ["int16", [1], "bitpix"],  # !< Number bits/voxel.
            ["int64", [8], "dim"],  # !< Data array dimensions.
            ["double", [1], "intent_p1"],  # !< 1st intent parameter.
            ["double", [1], "intent_p2"],  # !< 2nd intent parameter.
            ["double", [1], "intent_p3"],  # !< 3rd intent parameter.
            ["double", [8], "pixdim"],  # !< Grid spacings.
            ["int64", [1], "vox_offset"],  # !< Offset into .nii file
            ["double", [1], "scl_slope"],  # !< Data scaling: slope.
            ["double", [1], "scl_inter"],  # !< Data scaling: offset.
            ["double", [1], "cal_max"],  # !< Max display intensity
            ["double", [1], "cal_min"],  # !< Min display intensity
            ["double", [1], "slice_duration"],  # !< Time for 1 slice.
            ["double", [1], "toffset"],  # !< Time axis shift.
            ["int64", [1], "slice_start"],  # !< First slice index.
            ["int64", [1], "slice_end"],  # !< Last slice index.
            ["int8", [80], "descrip"],  # !< any text you like.
            ["int8", [24], "aux_file"],  # !< auxiliary filename.
            ["int32", [1], "qform_code"],  # !< NIFTI_XFORM_* code.
            ["int32", [1], "sform_code"],  # !< NIFTI_XFORM_* code.
            ["double", [1], "quatern_b"],  # !< Quaternion b param.
            ["double", [1], "quatern_c"],  # !< Quaternion c param.
            ["double", [1], "quatern_d"],  # !< Quaternion d param.
            ["double", [1], "qoffset_x"],  # !< Quaternion x shift.
            ["double", [1], "qoffset_y"],  # !< Quaternion y shift.
            ["double", [1], "qoffset_z"],  # !< Quaternion z shift.
            ["double", [4], "srow_x"],  # !< 1st row affine transform.
            ["double", [4], "srow_y"],  # !< 2nd row affine transform.
            ["double", [4], "srow_z"],  # !< 3rd row affine transform.
            ["int32", [1], "slice_code"],  # !< Slice timing order.
            ["int32", [1], "xyzt_units"],  # !< Units of pixdim[1..4]
            ["int32", [1], "intent_code"],  # !< NIFTI_INTENT_* code.
            ["int8", [16], "intent_name"],  # !< 'name' or meaning of data.
            ["int8", [1], "dim_info"],  # !< MRI slice ordering.
            ["int8", [15], "reserved"],  # !< unused buffer
            ["int8", [4], "extension"],  # !< header extension
        ],
    }

    if format == "":
        format = "nifti1"

    format = format.lower()

    if format in header:
        niiheader = header[format]
    else:
        raise ValueError("format must be either nifti1 or nifti2")

    return niiheader


def niidtype(format, byteorder="<"):
    """
    Build a packed numpy structured dtype from a niiformat() field list
    """
    fields = []
    for dtype_str, shape, field in format:
        count = int(np.prod(shape))
        fields.append(
            (
                field,
                np.dtype(dtype_str).newbyteorder(byteorder),
                (count,) if count > 1 else (),
            )
        )
    return np.dtype(fields)


def memmapstream(
    bytes_in: Union[bytes, bytearray, memoryview, np.ndarray],
    format: list,
    byteorder: str = "<",
):
    """
    Map a byte stream into structured data using a format specification.

    Parameters
    ----------
    bytes_in : bytes, bytearray, memoryview or numpy.ndarray of dtype uint8/int8
        Input byte stream
    format : list of [dtype_str, shape, field_name]
        Specification of fields, see niiformat()
    byteorder : str
        '<' for little-endian or '>' for big-endian streams

    Returns
    -------
    outstruct : dict
        Dictionary mapping field names to numpy scalars/arrays. Fields that
        do not fit in the stream are left out, together with all fields
        following them.

    Example
    -------
    fmt = [
        ['uint8', [4], 'name'],
        ['uint8', [1], 'age'],
        ['uint8', [2], 'school']
    ]
    memmapstream(b'Andy' + bytes([5]) + b'JT', fmt)
    {'name': array([65, 110, 100, 121], dtype=uint8),
     'age': 5,
     'school': array([74, 84], dtype=uint8)}
    """

    if not isinstance(bytes_in, (bytes, bytearray, memoryview, np.ndarray)):
        raise TypeError(
            "Input must be bytes, bytearray, memoryview or a uint8/int8 ndarray."
        )

    if isinstance(bytes_in, np.ndarray) and bytes_in.dtype not in [np.uint8, np.int8]:
        raise TypeError("NumPy input must be of dtype uint8 or int8.")

    if not (isinstance(format, list) and all(len(f) == 3 for f in format)):
        raise ValueError("Format must be a list of [dtype, shape, fieldname].")

    buflen = bytes_in.nbytes if isinstance(bytes_in, memoryview) else len(bytes_in)

    offset = 0
    fitted = []
    for dtype_str, shape, field in format:
        nbytes = int(np.prod(shape)) * np.dtype(dtype_str).itemsize
        if offset + nbytes > buflen:
            break
        fitted.append([dtype_str, shape, field])
        offset += nbytes

    outstruct = defaultdict()
    if not fitted:
        return outstruct

    record = np.frombuffer(
        bytes_in, dtype=niidtype(fitted, byteorder), count=1, offset=0
    )[0]

    for dtype_str, shape, field in fitted:
        outstruct[field] = record[field]

    return outstruct


def niicodemap(name, value):
    """
    Convert between NIFTI numeric codes and human-readable string header values.

    Parameters
    ----------
    name : str
        The NIFTI field name. Supports:
        'intent_code', 'slice_code', 'datatype', 'qform_code',
        'sform_code', 'xyzt_units', 'unit', 'Intent', 'SliceType',
        'DataType', 'QForm', 'SForm'
    value : str or int
        A string name or numeric code to convert.

    Returns
    -------
    newval : int or str
        Mapped value in the opposite domain of the input.
    """

    # Lookup table: code -> name
    lut = defaultdict(dict)
    lut["intent_code"] = {
        0: "",
        2: "corr",
        3: "ttest",
        4: "ftest",
        5: "zscore",
        6: "chi2",
        7: "beta",
        8: "binomial",
        9: "gamma",
        10: "poisson",
        11: "normal",
        12: "ncftest",
        13: "ncchi2",
        14: "logistic",
        15: "laplace",
        16: "uniform",
        17: "ncttest",
        18: "weibull",
        19: "chi",
        20: "invgauss",
        21: "extval",
        22: "pvalue",
        23: "logpvalue",
        24: "log10pvalue",
        1001: "estimate",
        1002: "label",
        1003: "neuronames",
        1004: "matrix",
        1005: "symmatrix",
        1006: "dispvec",
        1007: "vector",
        1008: "point",
        1009: "triangle",
        1010: "quaternion",
        1011: "unitless",
        2001: "tseries",
        2002: "elem",
        2003: "rgb",
        2004: "rgba",
        2005: "shape",
    }

    lut["slice_code"] = {
        0: "",
        1: "seq+",
        2: "seq-",
        3: "alt+",
        4: "alt-",
        5: "alt2+",
        6: "alt2-",
    }

    lut["datatype"] = {
        0: "",
        1: "binary",
        2: "uint8",
        4: "int16",
        8: "int32",
        16: "single",
        32: "complex64",
        64: "double",
        128: "rgb24",
        256: "int8",
        512: "uint16",
        768: "uint32",
        1024: "int64",
        1280: "uint64",
        1536: "double128",
        1792: "complex128",
        2048: "complex256",
        2304: "rgba32",
    }

    lut["xyzt_units"] = {
        0: "",
        1: "m",
        2: "mm",
        3: "um",
        8: "s",
        16: "ms",
        24: "us",
        32: "hz",
        40: "ppm",
        48: "rad",
    }

    lut["qform_code"] = {
        0: "",
        1: "scanner_anat",
        2: "aligned_anat",
        3: "talairach",
        4: "mni_152",
        5: "template_other",
    }

    # Aliases for consistency
    lut["sform_code"] = lut["qform_code"]
    lut["unit"] = lut["xyzt_units"]
    lut["slicetype"] = lut["slice_code"]
    lut["intent"] = lut["intent_code"]
    lut["qform"] = lut["qform_code"]
    lut["sform"] = lut["sform_code"]

    name = name.lower()

    if name not in lut:
        raise ValueError(f"Unsupported field name: {name}")

    if isinstance(value, (np.ndarray, np.generic)) and value.size == 1:
        if value.ndim == 0:
            value = int(value)
        else:
            value = int(value[0])

    if isinstance(value, (int, float)):
        value = int(value)
        if value not in lut[name]:
            raise ValueError(f"Code {value} not found in {name}")
        return lut[name][value]

    # Reverse LUT: name -> code
    rev_lut = {v: k for k, v in lut[name].items()}

    if value not in rev_lut:
        raise ValueError(f"String value '{value}' not found in {name}")
    return rev_lut[value]


##====================================================================================
## header decoders
##====================================================================================


def _bytestr(value):
    return np.asarray(value).tobytes().split(b"\x00")[0].decode("latin-1")


def _pyvalue(value):
    value = np.asarray(value)
    if value.ndim == 0:
        return value.item()
    return value.tolist()


def _codestring(name, value):
    try:
        return niicodemap(name, value)
    except ValueError:
        return "unknown"


class NIFTIHeader(object):
    """Decoded NIFTI header, shared by the NIFTI-1 and NIFTI-2 layouts

    After readheader() the object exposes every on-disk field under its C
    name (pixdim, scl_slope, descrip, srow_x, ...), plus the accessors

        dims            -- dim[0..7] as a list of ints
        vox_offset      -- byte offset of the voxel data (int)
        numbitspervoxel -- bitpix
        datatypecode    -- datatype
        extensionflag   -- the 4 bytes following the header
        extensionsize   -- esize of the first extension, 0 if absent
        extensioncode   -- ecode of the first extension, 0 if absent
    """

    FORMAT = None
    HEADER_SIZE = None
    MAGIC_NUMBER = None
    MAGIC_NUMBER_LOCATION = None

    _charfields = ("data_type", "db_name", "descrip", "aux_file", "intent_name")
    _renamed = {
        "dim": "dims",
        "bitpix": "numbitspervoxel",
        "datatype": "datatypecode",
        "extension": "extensionflag",
    }

    def __init__(self):
        self.littleendian = True
        self.dims = []
        self.pixdim = []
        self.vox_offset = 0
        self.numbitspervoxel = 0
        self.datatypecode = 0
        self.extensionflag = [0, 0, 0, 0]
        self.extensionsize = 0
        self.extensioncode = 0
        self.magic = ""

    @property
    def byteorder(self):
        return "<" if self.littleendian else ">"

    def getextensionlocation(self):
        return self.HEADER_SIZE + 4

    def _detectbyteorder(self, data):
        for order in ("<", ">"):
            (size,) = struct.unpack(order + "i", bytes(data[:4]))
            if size == self.HEADER_SIZE:
                return order

        # fall back to dim[0], which must lie in 1..7
        location, dimtype = self._dimlocation
        size = struct.calcsize(dimtype)
        for order in ("<", ">"):
            (ndim,) = struct.unpack(
                order + dimtype, bytes(data[location : location + size])
            )
            if 1 <= ndim <= 7:
                return order

        raise NiftiFormatError(
            "unable to determine the byte order of the {} header".format(self.FORMAT)
        )

    def readheader(self, data):
        """Decode all header fields from the byte stream

        The object is only updated once every field has been decoded; a
        NiftiFormatError leaves it untouched.
        """
        if data is None or len(data) < self.HEADER_SIZE:
            raise NiftiFormatError(
                "a {} header needs at least {} bytes".format(
                    self.FORMAT, self.HEADER_SIZE
                )
            )

        byteorder = self._detectbyteorder(data)
        raw = memmapstream(
            data if isinstance(data, np.ndarray) else memoryview(data).cast("B"),
            niiformat(self.FORMAT),
            byteorder,
        )

        values = {}
        for name, value in raw.items():
            if name in self._charfields or name == "magic":
                values[name] = _bytestr(value)
            elif name == "extension":
                values[name] = np.asarray(value).astype(np.uint8).tolist()
            else:
                values[name] = _pyvalue(value)

        if "extension" not in values:
            values["extension"] = [0, 0, 0, 0]

        values["vox_offset"] = int(values["vox_offset"])
        for name, newname in self._renamed.items():
            values[newname] = values.pop(name)

        values["extensionsize"] = 0
        values["extensioncode"] = 0
        location = self.getextensionlocation()
        if (
            values["extensionflag"][0] != 0
            and len(data) >= location + EXTENSION_HEADER_SIZE
        ):
            values["extensionsize"], values["extensioncode"] = struct.unpack(
                byteorder + "ii",
                bytes(data[location : location + EXTENSION_HEADER_SIZE]),
            )

        values["littleendian"] = byteorder == "<"
        vars(self).update(values)
        return self

    def getdatatypestring(self):
        return _codestring("datatype", self.datatypecode)

    def getunitsstring(self):
        """Return the (spatial, temporal) unit names packed in xyzt_units"""
        units = getattr(self, "xyzt_units", 0)
        return _codestring("unit", units & 0x07), _codestring("unit", units & 0x38)

    def toformattedstring(self):
        """Return a multi-line, human-readable listing of the header"""
        lines = [
            "Format = {}".format(self.FORMAT),
            "Byte Order = {}".format(
                "little-endian" if self.littleendian else "big-endian"
            ),
            "Magic = {}".format(self.magic),
            "Dims = {}".format(" ".join(str(d) for d in self.dims)),
            "Datatype = {} ({})".format(self.datatypecode, self.getdatatypestring()),
            "Bits Per Voxel = {}".format(self.numbitspervoxel),
            "Pixdim = {}".format(" ".join("{:g}".format(p) for p in self.pixdim)),
            "Units = {} {}".format(*self.getunitsstring()).rstrip(),
            "Vox Offset = {}".format(self.vox_offset),
            "Scale Slope = {:g}".format(getattr(self, "scl_slope", 0)),
            "Scale Intercept = {:g}".format(getattr(self, "scl_inter", 0)),
            "Cal Max = {:g}".format(getattr(self, "cal_max", 0)),
            "Cal Min = {:g}".format(getattr(self, "cal_min", 0)),
            "Description = {}".format(getattr(self, "descrip", "")),
            "Aux File = {}".format(getattr(self, "aux_file", "")),
            "Intent Name = {}".format(getattr(self, "intent_name", "")),
            "QForm Code = {}".format(getattr(self, "qform_code", 0)),
            "SForm Code = {}".format(getattr(self, "sform_code", 0)),
        ]
        for row in ("srow_x", "srow_y", "srow_z"):
            lines.append(
                "{} = {}".format(
                    row, " ".join("{:g}".format(v) for v in getattr(self, row, []))
                )
            )
        lines.append(
            "Extension = {}".format(" ".join(str(b) for b in self.extensionflag))
        )
        if self.extensionflag[0] != 0:
            lines.append("Extension Size = {}".format(self.extensionsize))
            lines.append("Extension Code = {}".format(self.extensioncode))
        return "\n".join(lines)

    def __repr__(self):
        return "<{} dims={} datatype={} vox_offset={}>".format(
            type(self).__name__, self.dims, self.datatypecode, self.vox_offset
        )


class NIFTI1(NIFTIHeader):
    FORMAT = "nifti1"
    HEADER_SIZE = STANDARD_HEADER_SIZE
    MAGIC_NUMBER = NIFTI1_MAGIC_NUMBER
    MAGIC_NUMBER_LOCATION = NIFTI1_MAGIC_NUMBER_LOCATION
    _dimlocation = (40, "h")


class NIFTI2(NIFTIHeader):
    FORMAT = "nifti2"
    HEADER_SIZE = NIFTI2_HEADER_SIZE
    MAGIC_NUMBER = NIFTI2_MAGIC_NUMBER
    MAGIC_NUMBER_LOCATION = NIFTI2_MAGIC_NUMBER_LOCATION
    _dimlocation = (16, "q")


##====================================================================================
## header builder
##====================================================================================


def nifticreate(
    dims, datatype=2, format="nifti1", img=None, byteorder="<", extensions=None, **kwargs
):
    """
    Create the byte stream of a single-file (.nii) NIFTI-1/2 image.

    Parameters
    ----------
    dims : list of int
        image size along each axis, 1 to 7 axes
    datatype : int
        NIFTI datatype code, see niidatatype
    format : str
        'nifti1' (default) or 'nifti2'
    img : bytes or numpy.ndarray, optional
        voxel data appended after the header; arrays are written in
        Fortran (x-fastest) order using the requested byte order
    byteorder : str
        '<' for little-endian (default) or '>' for big-endian
    extensions : list of (ecode, bytes), optional
        extension blocks; each payload is zero-padded so that the block
        size is a multiple of 16
    **kwargs : other header fields given by their C names, e.g. descrip='T1'

    Returns
    -------
    buf : bytes
        header, extension flag, extension blocks and voxel data
    """
    format = (format or "nifti1").lower()
    layout = niiformat(format)
    headerlen = NIFTI2_HEADER_SIZE if format == "nifti2" else STANDARD_HEADER_SIZE

    if len(dims) < 1 or len(dims) > 7:
        raise ValueError("dims must have between 1 and 7 elements")
    if datatype not in niidatatype:
        raise ValueError(f"Unsupported datatype code: {datatype}")

    header = np.zeros(1, dtype=niidtype(layout, byteorder))

    header["sizeof_hdr"] = headerlen
    header["dim"] = [len(dims)] + list(dims) + [1] * (7 - len(dims))
    header["datatype"] = datatype
    header["bitpix"] = niidatatype[datatype][1] * niidatatype[datatype][2] * 8
    header["pixdim"] = [1] * 8
    header["scl_slope"] = 1
    header["srow_x"] = [1, 0, 0, 0]
    header["srow_y"] = [0, 1, 0, 0]
    header["srow_z"] = [0, 0, 1, 0]
    header["sform_code"] = 1

    if format == "nifti2":
        magic = NIFTI2_MAGIC_NUMBER + b"\x00\r\n\x1a\n"
    else:
        magic = NIFTI1_MAGIC_NUMBER + b"\x00"
    header["magic"] = np.frombuffer(magic, dtype=np.int8)

    extbuf = b""
    for ecode, payload in extensions or []:
        payload = bytes(payload)
        esize = EXTENSION_HEADER_SIZE + len(payload)
        esize += -esize % 16
        extbuf += struct.pack(byteorder + "ii", esize, ecode)
        extbuf += payload.ljust(esize - EXTENSION_HEADER_SIZE, b"\x00")

    header["extension"] = [1 if extbuf else 0, 0, 0, 0]
    header["vox_offset"] = headerlen + 4 + len(extbuf)

    for name, value in kwargs.items():
        if name not in header.dtype.names:
            raise ValueError(f"Unknown header field: {name}")
        if isinstance(value, str):
            size = header[name].size
            value = np.frombuffer(
                value.encode("latin-1")[:size].ljust(size, b"\x00"), dtype=np.int8
            )
        header[name] = value

    buf = header.tobytes() + extbuf

    if img is not None:
        if isinstance(img, np.ndarray):
            img = img.astype(img.dtype.newbyteorder(byteorder)).tobytes(order="F")
        buf += bytes(img)

    return buf
