from collections import Counter
from collections.abc import Sequence

from macroapi.domain.entity import TaskDescriptor
from macroapi.domain.exception import PreconditionError


def validate_descriptors(descriptors: Sequence[TaskDescriptor]) -> bool:
    """
    Validates that every descriptor has a usable, unique id.

    :param descriptors: The task descriptors of one run
    :type descriptors: Sequence[TaskDescriptor]
    :returns: True if the descriptors are valid
    :rtype: bool
    :raises PreconditionError: If an item is not a descriptor, or an id is empty or
        appears more than once
    """
    for descriptor in descriptors:
        if not isinstance(descriptor, TaskDescriptor):
            raise PreconditionError(f"Expected a TaskDescriptor, got {descriptor!r}")
        if not descriptor.id or not isinstance(descriptor.id, str):
            raise PreconditionError(f"Invalid task id: {descriptor.id!r}")
    counts = Counter(descriptor.id for descriptor in descriptors)
    duplicates = sorted(task_id for task_id, count in counts.items() if count > 1)
    if duplicates:
        raise PreconditionError(f"Task ids should be unique, duplicates: {', '.join(duplicates)}")
    return True


def partition(descriptors: Sequence[TaskDescriptor], chunk_size: int) -> list[list[TaskDescriptor]]:
    """
    Splits descriptors into ordered chunks of at most ``chunk_size`` elements.

    :param descriptors: The task descriptors to split
    :type descriptors: Sequence[TaskDescriptor]
    :param chunk_size: Maximum number of descriptors per chunk
    :type chunk_size: int
    :returns: The chunks, in input order; the final chunk may be smaller
    :rtype: list[list[TaskDescriptor]]
    :raises PreconditionError: If chunk_size is smaller than 1
    """
    if chunk_size < 1:
        raise PreconditionError(f"chunk_size must be at least 1, got {chunk_size}")
    return [list(descriptors[i : i + chunk_size]) for i in range(0, len(descriptors), chunk_size)]
