"""
Matrix norms (maximum-element, Frobenius, induced 1-norm and induced infinity-norm)
calculated sequentially and in parallel.

Dense matrix
^^^^^^^^^^^^

.. autoclass:: normbench.matrix.DenseMatrix
    :members:

Engines
^^^^^^^

Both :py:mod:`normbench.sequential` and :py:mod:`normbench.parallel` provide
``max_norm``, ``frobenius_norm``, ``one_induced_norm`` and ``inf_induced_norm``;
the parallel versions take an additional ``parallelism`` argument.
"""

VERSION = (0, 1, 0)
