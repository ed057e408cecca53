from setuptools import setup, find_packages

import pathlib
HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text()
about = {}
exec((HERE / "pyschnorr" / "version.py").read_text(), about)


setup(
    name="pyschnorr",
    version=about['__version__'],
    python_requires='>=3.5',
    description="Schnorr signatures and naive signature aggregation over secp256k1 for python",
    long_description=README,
    long_description_content_type="text/markdown",
    author="rage-proof",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
    ],
    include_package_data=True,
    packages=find_packages(exclude=["tests"]),
    install_requires=['chacha20poly1305==0.0.3', 'cryptography'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['pyschnorr=pyschnorr.cli:main']},
)
