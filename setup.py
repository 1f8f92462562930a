from setuptools import find_packages, setup

setup(
    name='celo_e2e',
    packages=find_packages(exclude=['tests', 'tests.*']),
    version='0.0.0',
    description='End-to-end transaction tests for Celo nodes',
    install_requires=[
        'eth_account>=0.13',
        'eth-keys',
        'eth-utils',
        'hexbytes>=1.2',
        'requests',
        'rlp',
        'urllib3',
        'web3>=7'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    }
)
