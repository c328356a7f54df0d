class FixturaError(Exception):
    """Base class of every error raised by fixtura.

    Each subclass also derives from the builtin exception matching its kind,
    so callers can catch either ``FixturaError`` or, say, ``LookupError``.
    """


class FixturaAttributeDefinitionError(FixturaError, ValueError):
    """Signal an invalid attribute declaration on a factory.

    Raised by ``Factory.add_attribute``, ``Factory.attribute``,
    ``Factory.computed`` and ``Factory.association`` when the attribute name is
    already declared, when both a value and a computation are supplied, or when
    the factory has already been run.

    Raised at definition time, so a failing ``Registry.define`` block never
    leaves a half-defined factory registered.
    """


class FixturaUnknownFactoryError(FixturaError, LookupError):
    """Signal a build request for a factory name that is not registered.

    Raised by ``Registry.get``, ``Registry.attributes_for``, ``Registry.build``,
    ``Registry.create`` and by associations that point at a missing factory.

    Typical fixes include defining the factory before use or calling
    ``find_definitions`` during test setup.
    """


class FixturaUnresolvedAttributeError(FixturaError, AttributeError):
    """Signal a lookup of a sibling attribute that has not been resolved yet.

    Raised by ``Proxy.get`` when a dynamic attribute reads an attribute that is
    declared later in the factory (or not declared at all).

    Typical fix is declaring attributes in dependency order.
    """


class FixturaTypeResolutionError(FixturaError, NameError):
    """Signal that a factory build class cannot be resolved.

    Raised while constructing a ``Factory`` when an explicit class name or the
    class name inferred from the factory name does not resolve to a class.

    Typical fixes include passing ``build_class=SomeClass`` explicitly or
    registering the class with ``Registry.register_class``.
    """


class FixturaAmbiguousOverrideError(FixturaError, ValueError):
    """Signal that several override keys target the same attribute.

    Raised when two keys normalize to the same name (for example a string and
    an enum member), or when a direct key and an aliased key resolve to the
    same declared attribute.
    """


class FixturaInvalidNameError(FixturaError, TypeError):
    """Signal a factory name or attribute key of an unsupported type.

    Factory names accept strings, enum members and classes. Attribute keys
    accept strings and enum members.
    """


class FixturaProxyStateError(FixturaError, RuntimeError):
    """Signal use of a build proxy after its result was produced."""


class FixturaPersistenceError(FixturaError):
    """Signal that a created instance cannot be persisted.

    Raised by the default persistence hook when the instance has no callable
    ``save`` method.

    Typical fix is passing ``persist=...`` to the factory or registry.
    """


class FixturaDefinitionLoadError(FixturaError, ImportError):
    """Signal a failure while loading a factory definitions file.

    Raised by ``find_definitions``; the original exception is chained as the
    cause.
    """
