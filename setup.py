from setuptools import setup, find_packages


def get_version(filename):
    import ast
    version_ = None
    with open(filename) as f:
        for line in f:
            if line.startswith('__version__'):
                version_ = ast.parse(line).body[0].value.value
                break
        else:
            raise ValueError('No version found in %r.' % filename)
    if version_ is None:
        raise ValueError(filename)
    return version_


version = get_version(filename='src/cachedcall/__init__.py')

setup(
        name='cachedcall',
        version=version,

        description="Memoization of method results, per instance or per class, "
                    "keyed on the method and its arguments.",

        long_description="""
        cachedcall stores the results of method calls on the object
        (or on the class) that made them, keyed on the method name and
        the arguments. Arguments can be scalars or objects that carry
        an identifier.
    """,

        keywords="memoization, cache, methods",
        license="LGPL",

        classifiers=[
            'Development Status :: 5 - Production/Stable',
            'Intended Audience :: Developers',
            'Topic :: Software Development :: Libraries',
            'License :: OSI Approved :: GNU Library or '
            'Lesser General Public License (LGPL)',
        ],

        package_dir={'': 'src'},
        packages=find_packages('src'),
        python_requires='>=3.9',
        install_requires=[
            'zuper-commons-z7',
            'decorator',
        ],

        extras_require={
            'test': ['pytest'],
        },
)
