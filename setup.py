from setuptools import setup, find_namespace_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs>=15.0',
    'pymongo>=4.0',
]

setup(
    name='nftledger',
    version=__version__,
    description='Ownership and approval ledger for non-fungible token collections.',
    packages=find_namespace_packages(include=['nftledger', 'nftledger.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
