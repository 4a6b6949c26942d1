from setuptools import setup

import os.path

setup_dir = os.path.split(os.path.abspath(__file__))[0]
DOCUMENTATION = open(os.path.join(setup_dir, 'README.rst')).read()

normbench_path = os.path.join(setup_dir, 'normbench', '__init__.py')
globals_dict = {}
with open(normbench_path) as f:
	exec(f.read(), globals_dict)
VERSION = '.'.join([str(x) for x in globals_dict['VERSION']])

dependencies = ['mako', 'numpy', 'pyopencl']

setup(
	name='normbench',
	packages=['normbench', 'normbench.backends'],
	provides=['normbench'],
	install_requires=dependencies,
	extras_require={
		'test': ['pytest', 'pyopencl[pocl]'],
	},
	package_data={'normbench': ['backends/*.mako']},
	python_requires='>=3.8',
	version=VERSION,
	description='Sequential and parallel (OpenCL or thread pool) matrix norms',
	long_description=DOCUMENTATION,
	entry_points={
		'console_scripts': ['normbench = normbench.__main__:main'],
	},
	classifiers=[
		'Development Status :: 4 - Beta',
		'Intended Audience :: Developers',
		'License :: OSI Approved :: MIT License',
		'Operating System :: OS Independent',
		'Programming Language :: Python :: 3',
		'Topic :: Scientific/Engineering :: Mathematics'
	]
)
