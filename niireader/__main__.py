"""Command line utility for niireader.

Prints the headers of NIFTI-1/2 (.nii/.nii.gz) files in human-readable form.

Call

    python -mniireader -h

to get help with command line usage.
"""

import argparse
import sys

from .niiheader import NiftiError, TYPE_RGB24
from .nifti import readheader, iterextensions, isplanar
from .niifile import readniibytes


def main(argv=None):
    #
    # get arguments and print the headers
    #

    parser = argparse.ArgumentParser(
        description="Print the header of NIFTI-1/NIFTI-2 (.nii/.nii.gz) files."
    )

    parser.add_argument(
        "file",
        nargs="+",
        help="path to a NIFTI-1/2 (.nii) or a gzip-compressed NIFTI-1/2 (.nii.gz) file",
    )
    parser.add_argument(
        "-e",
        "--extensions",
        action="store_const",
        const=True,
        default=False,
        help="list the header extension blocks",
    )
    parser.add_argument(
        "-r",
        "--rgb",
        action="store_const",
        const=True,
        default=False,
        help="report whether RGB24 voxels are stored planar or packed",
    )

    args = parser.parse_args(argv)

    for path in args.file:
        try:
            data = readniibytes(path)
            header = readheader(data)
            if header is None:
                raise NiftiError("File {} is not a NIFTI-1/2 file.".format(path))

            print("File = {}".format(path))
            print(header.toformattedstring())

            if args.extensions:
                for ecode, payload in iterextensions(header, data):
                    print("Extension ecode={} size={}".format(ecode, len(payload)))

            if args.rgb and header.datatypecode == TYPE_RGB24:
                print(
                    "RGB Layout = {}".format(
                        "planar" if isplanar(header, data) else "packed"
                    )
                )
        except (OSError, ValueError) as e:
            print("Error: {}".format(e))
            sys.exit(1)


if __name__ == "__main__":
    main()
