from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from pulumi import Resource, ResourceOptions, log

E = TypeVar("E")
"""What a lookup returns for a resource that already exists"""

T = TypeVar("T")
"""The resource type declared when nothing exists"""

V = TypeVar("V")


def desired_count(existing: Optional[object]) -> int:
    """
    How many copies of a guarded resource to declare

    :param existing: Lookup result, ``None`` when nothing matched
    :return: 1 when nothing exists, 0 otherwise
    """
    return 0 if existing is not None else 1


def effective_id(existing: Optional[V], created: Optional[V]) -> V:
    """
    Resolve a reference to a guarded resource. Exactly one branch is ever set.

    :param existing: Value taken from the lookup result
    :param created: Value taken from the newly declared resource
    :return: ``existing`` when present, else ``created``
    """
    if existing is not None and created is not None:
        raise ValueError("guarded resource was both found and created")
    if existing is not None:
        return existing
    if created is None:
        raise ValueError("guarded resource was neither found nor created")
    return created


@dataclass
class Guarded(Generic[E, T]):
    label: str
    """Human-readable name of the guarded resource"""

    existing: Optional[E]
    """Lookup result, set when the resource already existed"""

    resource: Optional[T]
    """Declared resource, set when this run created it"""

    @property
    def created(self) -> bool:
        return self.resource is not None

    def resolve(self, from_existing: Callable[[E], V], from_created: Callable[[T], V]) -> V:
        """
        Pick an attribute from whichever branch is set

        :param from_existing: Attribute getter for the lookup result
        :param from_created: Attribute getter for the declared resource
        :return: The attribute value
        """
        return effective_id(
            from_existing(self.existing) if self.existing is not None else None,
            from_created(self.resource) if self.resource is not None else None,
        )

    @property
    def id(self):
        """The id of the existing resource if found, otherwise the id of the created one"""
        return self.resolve(lambda existing: getattr(existing, "id", existing), lambda resource: resource.id)


def guard(label: str, existing: Optional[E], create: Callable[[], T]) -> Guarded[E, T]:
    """
    Declare a resource only when its lookup came back empty

    :param label: Human-readable name of the resource
    :param existing: Lookup result, ``None`` when nothing matched
    :param create: Declares the resource, called at most once
    :return: The guarded resource
    """
    created = [create() for _ in range(desired_count(existing))]

    if created:
        log.debug(f"`{label}` not found, declaring it")
    else:
        log.info(f"`{label}` already exists as `{getattr(existing, 'id', existing)}`, reusing it")

    return Guarded(label=label, existing=existing, resource=created[0] if created else None)


def guarded_options(parent: Resource, retain: bool) -> ResourceOptions:
    """
    Options for a resource declared under an existence guard

    Once a guarded resource exists, later runs find it and stop declaring it. With ``retain`` set, Pulumi then drops
    it from its state instead of deleting it from the account.

    :param parent: Parent resource
    :param retain: Whether existence guards are enabled
    :return: Resource options
    """
    return ResourceOptions(parent=parent, retain_on_delete=True if retain else None)
