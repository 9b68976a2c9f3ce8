"""nifti.py test unit

To run the test, please run

   python3 -m unittest test.testnifti

in the root folder.

Copyright (c) 2019-2026 Qianqian Fang <q.fang at neu.edu>
"""

import unittest
import struct
import zlib
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from niireader.nifti import (
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
)
from niireader.niiheader import (
    nifticreate,
    NIFTI1,
    NIFTI2,
    NiftiFormatError,
    NiftiFormatWarning,
    DecompressionError,
    OutOfRangeError,
)

import numpy as np


def gzipencode(buf):
    gzipper = zlib.compressobj(wbits=(zlib.MAX_WBITS | 16))
    return gzipper.compress(buf) + gzipper.flush()


class Test_detect(unittest.TestCase):
    @classmethod
    def setUpClass(self, *args, **kwargs):
        self.img = np.arange(4 * 5 * 6, dtype=np.float32).reshape((4, 5, 6))
        self.nii1 = nifticreate([4, 5, 6], 16, "nifti1", img=self.img)
        self.nii2 = nifticreate([4, 5, 6], 16, "nifti2", img=self.img)

    def test_isnifti1(self):
        self.assertTrue(isnifti1(self.nii1))
        self.assertFalse(isnifti2(self.nii1))
        self.assertTrue(isnifti(self.nii1))
        self.assertEqual(niitype(self.nii1), "nifti1")

    def test_isnifti2(self):
        self.assertTrue(isnifti2(self.nii2))
        self.assertFalse(isnifti1(self.nii2))
        self.assertTrue(isnifti(self.nii2))
        self.assertEqual(niitype(self.nii2), "nifti2")

    def test_short_buffer(self):
        self.assertFalse(isnifti1(self.nii1[:347]))
        self.assertFalse(isnifti2(self.nii2[:347]))
        self.assertFalse(isnifti(b""))
        self.assertFalse(isnifti(None))
        self.assertIsNone(niitype(b"n+1" * 10))

    def test_nifti2_minimum_length(self):
        # the NIFTI-2 magic check only needs the NIFTI-1 header length
        self.assertTrue(isnifti2(self.nii2[:348]))

    def test_buffer_types(self):
        self.assertTrue(isnifti1(bytearray(self.nii1)))
        self.assertTrue(isnifti1(memoryview(self.nii1)))
        self.assertTrue(isnifti2(np.frombuffer(self.nii2, dtype=np.uint8)))

    def test_iscompressed(self):
        self.assertTrue(iscompressed(gzipencode(self.nii1)))
        self.assertFalse(iscompressed(self.nii1))
        self.assertFalse(iscompressed(self.nii2))
        self.assertFalse(iscompressed(b""))
        self.assertFalse(iscompressed(None))

    def test_iscompressed_single_byte(self):
        self.assertFalse(iscompressed(b"\x1f\x00"))
        self.assertFalse(iscompressed(b"\x00\x8b"))
        self.assertFalse(iscompressed(b"\x1f"))
        self.assertTrue(iscompressed(b"\x1f\x00", strict=False))
        self.assertTrue(iscompressed(b"\x00\x8b", strict=False))
        self.assertTrue(iscompressed(b"\x1f", strict=False))
        self.assertFalse(iscompressed(b"\x00\x00", strict=False))

    def test_decompress(self):
        self.assertEqual(decompress(gzipencode(self.nii1)), self.nii1)

    def test_decompress_error(self):
        with self.assertRaises(DecompressionError):
            decompress(b"\x1f\x8b" + b"\x00" * 32)


class Test_readheader(unittest.TestCase):
    @classmethod
    def setUpClass(self, *args, **kwargs):
        self.img = np.arange(4 * 5 * 6, dtype=np.int16).reshape((4, 5, 6))
        self.nii1 = nifticreate([4, 5, 6], 4, img=self.img)
        self.nii2 = nifticreate([4, 5, 6], 4, "nifti2", img=self.img)

    def test_dispatch_nifti1(self):
        hdr = readheader(self.nii1)
        self.assertIsInstance(hdr, NIFTI1)
        self.assertEqual(hdr.dims, [3, 4, 5, 6, 1, 1, 1, 1])
        self.assertEqual(hdr.vox_offset, 352)
        self.assertEqual(hdr.datatypecode, 4)
        self.assertEqual(hdr.numbitspervoxel, 16)

    def test_dispatch_nifti2(self):
        hdr = readheader(self.nii2)
        self.assertIsInstance(hdr, NIFTI2)
        self.assertEqual(hdr.dims, [3, 4, 5, 6, 1, 1, 1, 1])
        self.assertEqual(hdr.vox_offset, 544)

    def test_compressed_same_header(self):
        hdr = readheader(self.nii1)
        gzhdr = readheader(gzipencode(self.nii1))
        self.assertEqual(vars(gzhdr), vars(hdr))

        data = gzipencode(self.nii2)
        self.assertTrue(iscompressed(data))
        self.assertEqual(
            vars(readheader(decompress(data))), vars(readheader(self.nii2))
        )

    def test_unrecognized(self):
        with self.assertWarns(NiftiFormatWarning):
            self.assertIsNone(readheader(b"\x00" * 400))
        with self.assertWarns(NiftiFormatWarning):
            self.assertIsNone(readheader(b""))

    def test_malformed_compressed(self):
        with self.assertRaises(DecompressionError):
            readheader(b"\x1f\x8b\x08" + b"\xff" * 400)


class Test_readimage(unittest.TestCase):
    @classmethod
    def setUpClass(self, *args, **kwargs):
        self.img = np.arange(4 * 5 * 6 * 2, dtype=np.int16).reshape((4, 5, 6, 2))
        self.data = nifticreate([4, 5, 6, 2], 4, img=self.img)
        self.hdr = readheader(self.data)

    def test_imagesize(self):
        self.assertEqual(imagesize(self.hdr), 4 * 5 * 6 * 2 * 2)

    def test_readimage(self):
        img = readimage(self.hdr, self.data)
        self.assertEqual(len(img), 4 * 5 * 6 * 2 * 2)
        self.assertEqual(img, self.img.tobytes(order="F"))

    def test_zero_dims_default_to_one(self):
        data = nifticreate([3, 2, 2], 2, img=bytes(range(12)))
        hdr = readheader(data)
        hdr.dims[4] = 0
        hdr.dims[5] = 0
        self.assertEqual(readimage(hdr, data), bytes(range(12)))

    def test_readimage_overrun(self):
        short = self.data[:-10]
        with self.assertRaises(OutOfRangeError):
            readimage(self.hdr, short)
        with self.assertRaises(IndexError):
            readimage(self.hdr, short)
        self.assertEqual(
            len(readimage(self.hdr, short, strict=False)), 4 * 5 * 6 * 2 * 2 - 10
        )

    def test_readvolume(self):
        vol = readvolume(self.hdr, self.data)
        self.assertEqual(vol.shape, (4, 5, 6, 2))
        self.assertEqual(vol.dtype, np.dtype("<i2"))
        self.assertTrue(np.array_equal(vol, self.img))

    def test_readvolume_bigendian(self):
        data = nifticreate([4, 5, 6, 2], 4, img=self.img, byteorder=">")
        hdr = readheader(data)
        self.assertFalse(hdr.littleendian)
        vol = readvolume(hdr, data)
        self.assertEqual(vol.dtype, np.dtype(">i2"))
        self.assertTrue(np.array_equal(vol, self.img))

    def test_readvolume_rgb(self):
        rgb = np.arange(2 * 3 * 3, dtype=np.uint8)
        data = nifticreate([2, 3], 128, img=rgb.tobytes())
        vol = readvolume(readheader(data), data)
        self.assertEqual(vol.shape, (2, 3, 3))
        self.assertEqual(vol[0, 0].tolist(), [0, 1, 2])
        self.assertEqual(vol[1, 0].tolist(), [3, 4, 5])
        self.assertEqual(vol[0, 1].tolist(), [6, 7, 8])

    def test_readvolume_unsupported(self):
        data = nifticreate([2, 2], 2, img=bytes(4))
        hdr = readheader(data)
        hdr.datatypecode = 1536
        with self.assertRaises(NiftiFormatError):
            readvolume(hdr, data)


class Test_extension(unittest.TestCase):
    @classmethod
    def setUpClass(self, *args, **kwargs):
        self.payload = b'{"Description": "JSON sidecar carried as an extension"}'
        self.data = nifticreate(
            [2, 2, 2],
            2,
            img=bytes(range(8)),
            extensions=[(6, self.payload), (4, b"abc")],
        )
        self.hdr = readheader(self.data)

    def test_hasextension(self):
        self.assertTrue(hasextension(self.hdr))
        plain = nifticreate([2, 2, 2], 2, img=bytes(8))
        self.assertFalse(hasextension(readheader(plain)))

    def test_extension_header(self):
        self.assertEqual(self.hdr.extensionsize, 64)
        self.assertEqual(self.hdr.extensioncode, 6)
        self.assertEqual(self.hdr.getextensionlocation(), 352)
        self.assertEqual(self.hdr.vox_offset, 352 + 64 + 16)

    def test_readextension(self):
        ext = readextension(self.hdr, self.data)
        self.assertEqual(len(ext), 64)
        self.assertEqual(struct.unpack("<ii", ext[:8]), (64, 6))
        self.assertEqual(ext[8 : 8 + len(self.payload)], self.payload)

    def test_readextensiondata(self):
        ext = readextension(self.hdr, self.data)
        self.assertEqual(readextensiondata(self.hdr, self.data), ext[8:-8])
        self.assertEqual(len(readextensiondata(self.hdr, self.data)), 48)

    def test_iterextensions(self):
        exts = list(iterextensions(self.hdr, self.data))
        self.assertEqual(len(exts), 2)
        self.assertEqual(exts[0][0], 6)
        self.assertEqual(exts[0][1].rstrip(b"\x00"), self.payload)
        self.assertEqual(exts[1], (4, b"abc" + b"\x00" * 5))

    def test_nifti2_extension(self):
        data = nifticreate(
            [2, 2], 2, "nifti2", img=bytes(4), extensions=[(6, b"x" * 20)]
        )
        hdr = readheader(data)
        self.assertEqual(hdr.getextensionlocation(), 544)
        self.assertEqual(hdr.extensionsize, 32)
        self.assertEqual(readextensiondata(hdr, data), b"x" * 16)

    def test_extension_overrun(self):
        short = self.data[:380]
        hdr = readheader(short)
        with self.assertRaises(OutOfRangeError):
            readextension(hdr, short)
        self.assertEqual(len(readextension(hdr, short, strict=False)), 380 - 352)
        self.assertEqual(list(iterextensions(hdr, short)), [])


if __name__ == "__main__":
    unittest.main()
