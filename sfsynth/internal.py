# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------

"""Implements a digest function that identifies the state of traits objects."""

from hashlib import md5

from traits.trait_errors import TraitError


def digest(obj, name='digest'):
    """
    Generate a unique digest for the given object based on its traits.

    The digest is built from the class name and the string representation of every trait listed
    in ``depends_on`` of the trait ``name``. Dotted names (``'grid.digest'``) are followed into
    sub-objects. Traits that cannot be resolved (e.g. an unset ``Instance``) are skipped.
    """
    str_ = [str(obj.__class__).encode('UTF-8')]
    for do_ in obj.trait(name).depends_on:
        vobj = obj
        try:
            for i in do_.split('.'):
                vobj = list(vobj.trait_get(i.rstrip('[]')).values())[0]
        except (AttributeError, IndexError, TraitError):
            continue
        str_.append(str(vobj).encode('UTF-8'))
    return '_' + md5(b''.join(str_)).hexdigest()
