import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='riffkit',
    version='0.1.0',
    description='Read, validate and edit RIFF containers and WebP metadata.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        'deal',
        'parse',
        'typer',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Utilities'
    ],
    python_requires='>=3.7',
    keywords='riff webp chunk container metadata parse edit'
)
