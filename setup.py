from setuptools import setup


if __name__ == '__main__':
    setup(
        name='itercache',
        version='0.1.0',
        license='MIT',
        packages=['itercache'],
        install_requires=['click'],
        extras_require={
            'dev': [
                'black',
                'flake8',
                'flake8-import-order',
                'mypy',
                'pytest',
                'pytest-cov',
            ]
        },
        entry_points={'console_scripts': ['cachecat = itercache.cachecat_main:main']},
    )
