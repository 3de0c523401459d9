"""Exception-capturing assertions."""

from tapline.facade import *

plan(6)

a = [5, 10, 12]
b = [5, 10, 15]

is_(a[0], 5, "first element is 5")
isnt(a[2], b[2], "last elements differ")

throws(lambda: a[3], "3 out of bounds", IndexError)
throws_like(lambda: a[3], r"list index out of range", "and says why", IndexError)

b[2] = a[2] = b[2] * 2
is_(b[2], 30, "changed last element")
is_(a, b, "lists match now")
