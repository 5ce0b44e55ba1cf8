import setuptools
import sys

pure_python = False
pure_notice = "\n\n**Warning!** *This package is the zero-dependency version of EdSig. It lacks the PyCA key provider. Do NOT install this package unless you know exactly why you are doing it!*"

if '--pure' in sys.argv:
    pure_python = True
    sys.argv.remove('--pure')
    print("Building pure-python wheel")

exec(open("EdSig/_version.py", "r").read())

with open("README.md", "r") as fh:
    long_description = fh.read()

if pure_python:
    pkg_name = "edsigpure"
    requirements = []
    long_description = long_description+pure_notice
else:
    pkg_name = "edsig"
    requirements = ['cryptography>=3.4.7']

setuptools.setup(
    name=pkg_name,
    version=__version__,
    description="Ed25519 (EdDSA) key derivation, signing, verification and batch verification",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    entry_points= {
        'console_scripts': [
            'edsig=EdSig.Utilities.edsig:main',
        ]
    },
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
)
