from setuptools import setup, find_packages

setup(
    name='wallhtc',
    version='1.0',
    description='Wall heat transfer coefficient post-processing for OpenFOAM cases',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    python_requires='>=3.7',
    install_requires=[
        'matplotlib',
        'numpy',
        'pandas',
        'PyFoam',
      ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'wallhtc=wallhtc.postprocess:main',
        ]
    }
)
