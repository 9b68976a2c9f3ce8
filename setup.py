from setuptools import setup

with open("README.md", "r") as fh:
    readme = fh.read()

setup(
  name = 'niireader',
  packages = ['niireader'],
  version = '0.1.0',
  license='Apache license 2.0',
  description = 'Identify, decompress and decode NIFTI-1/NIFTI-2 neuroimaging volume files',
  long_description=readme,
  long_description_content_type="text/markdown",
  author = 'Qianqian Fang',
  author_email = 'fangqq@gmail.com',
  maintainer= 'Qianqian Fang',
  keywords = ['NIfTI', 'NIFTI-1', 'NIFTI-2', 'neuroimaging', 'MRI', 'RGB', 'Decoder'],
  platforms="any",
  python_requires='>=3.7',
  install_requires=[
        'numpy>=1.8.0'
      ],
  extras_require={
        'benchmark': ['nibabel']
      },
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.7',
    'Programming Language :: Python :: 3.8',
    'Programming Language :: Python :: 3.9',
    'Programming Language :: Python :: 3.10',
    'Topic :: Scientific/Engineering :: Medical Science Apps.',
    'Topic :: Software Development :: Libraries',
    'Topic :: Software Development :: Libraries :: Python Modules'
  ]
)
