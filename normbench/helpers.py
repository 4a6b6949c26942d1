"""
This module contains various auxiliary functions which are used throughout the package.
"""

import collections.abc
import functools
import operator
import os.path

from mako.template import Template


def product(seq):
    """
    Returns the product of elements in the iterable ``seq``.
    """
    return functools.reduce(lambda x1, x2: x1 * x2, seq, 1)


def template_for(filename):
    """
    Returns the Mako template object created from the file
    which has the same name as ``filename`` and the extension ``.mako``.
    Typically used in backend modules as ``template_for(__file__)``.
    """
    name, _ext = os.path.splitext(os.path.abspath(filename))
    # Creating a template from a filename results in more comprehensible stack traces.
    return Template(filename=name + '.mako', strict_undefined=True)


def positive_count(value, name):
    """
    Returns ``value`` as an ``int``, raising ``ValueError``
    if it is not an integer or is less than 1.
    """
    try:
        count = operator.index(value)
    except TypeError as e:
        raise ValueError(name + " must be a positive integer, got " + repr(value)) from e
    if count < 1:
        raise ValueError(name + " must be a positive integer, got " + repr(value))
    return count


def min_blocks(length, block):
    """
    Returns minimum number of blocks with length ``block``
    necessary to cover the array with length ``length``.
    """
    return (length - 1) // block + 1


def wrap_in_tuple(seq_or_elem):
    """
    If ``seq_or_elem`` is a sequence, converts it to a ``tuple``,
    otherwise returns a tuple with a single element ``seq_or_elem``.
    """
    if seq_or_elem is None:
        return tuple()
    elif isinstance(seq_or_elem, str):
        return (seq_or_elem,)
    elif isinstance(seq_or_elem, collections.abc.Iterable):
        return tuple(seq_or_elem)
    else:
        return (seq_or_elem,)
