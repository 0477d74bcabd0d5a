from setuptools import setup, find_packages

from daps import __version__

install_requires = [
    'boto3',
    'botocore',
    'colorama',
    'cryptography>=39.0.1',
    'prompt_toolkit',
    'tabulate',
]

if __name__ == '__main__':
    setup(
        name='daps',
        version=__version__,
        description='AWS Parameter Store CLI with tab completion and an encrypted local cache',
        python_requires='>=3.7',
        packages=find_packages(include=['daps', 'daps.*']),
        install_requires=install_requires,
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'daps=daps.__main__:main',
            ],
        },
    )
