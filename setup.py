""" seedtree build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import seedtree

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=seedtree.name,
    version=seedtree.__version__,
    license=seedtree.__license__,
    author=seedtree.__author__,
    author_email=seedtree.__author_email__,
    description="Seed-based deterministic key hierarchy and crypto primitives",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["cryptography", "dataclasses-json", "mnemonic"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "cryptography bip39 mnemonic hkdf ed25519 x25519 "
        "chacha20-poly1305 sha3 deterministic-wallet key-derivation"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
