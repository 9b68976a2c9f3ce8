import time
import os
import glob
import urllib.request
import zipfile
import tempfile
import shutil

import nibabel as nib
import numpy as np
import niireader as nr

tempdir = tempfile.mkdtemp()

url = "https://github.com/neurolabusc/niivue-images/archive/refs/heads/main.zip"
fname = os.path.join(tempdir, "niivue-images.zip")
urllib.request.urlretrieve(url, fname)

with zipfile.ZipFile(fname, "r") as zip_ref:
    zip_ref.extractall(tempdir)

niifiles = glob.glob(os.path.join(tempdir, "niivue-images-main/", "*.nii.gz"))

for ff in niifiles:
    # benchmark loading time from nib.load()
    t0 = time.time()
    img = nib.load(ff)
    data = np.asarray(img.dataobj)
    dt1 = time.time() - t0

    # benchmark loading time from nr.loadnifti()
    t1 = time.time()
    try:
        nii = nr.loadnifti(ff)
    except nr.NiftiError as e:
        print(f"{ff}: {e}")
        continue
    dt2 = time.time() - t1

    rgb = ""
    if nii["hdr"].datatypecode == nr.TYPE_RGB24:
        raw = nr.readniibytes(ff)
        rgb = "planar" if nr.isplanar(nii["hdr"], raw) else "packed"

    print(
        {
            "file": os.path.basename(ff),
            "nib": [list(data.shape), data.dtype.str],
            "nr": [list(nii["img"].shape), nii["img"].dtype.str, rgb],
            "nibtime": dt1,
            "nrtime": dt2,
            "speedup": dt1 / dt2,
        }
    )

try:
    shutil.rmtree(tempdir)
except OSError as e:
    print(f"unable to delete the temporary folder: {e}")
