import setuptools

setuptools.setup(
    name='sqload',
    version='0.1.0',
    description='Load named SQL queries into tagged dataclass fields',
    python_requires='>=3.9',
    install_requires=[
        'pytest>=4.5.0',
    ],
    extras_require={
        'testing': ['pytest>=4.5.0'],
    },
    packages=setuptools.find_packages(include=['sqload', 'sqload.*']),
)
