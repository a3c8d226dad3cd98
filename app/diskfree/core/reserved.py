"""Names that diskfree treats specially.

Reserved volumes belong to the boot disk and are never offered for
ejection. System processes are macOS background services that hold
handles on every mounted volume and release them by themselves once
the volume unmounts, so they are reported but never signalled.
"""

# Boot volume and its APFS companion partitions.
RESERVED_VOLUMES: frozenset[str] = frozenset(
    {
        "Macintosh HD",
        "Macintosh HD - Data",
        "Recovery",
        "Preboot",
        "VM",
        "Update",
    }
)

SYSTEM_PROCESSES: frozenset[str] = frozenset(
    {
        # Spotlight
        "mds",
        "mds_stores",
        "mdworker",
        "mdworker_shared",
        # File system events and integrity
        "fseventsd",
        "fsck",
        "revisiond",
        "diskarbitrationd",
        # iCloud
        "bird",
        "cloudd",
    }
)


def is_reserved_volume(name: str) -> bool:
    """Check if a volume name belongs to the boot disk.

    Args:
        name: Volume directory name under the mount root.

    Returns:
        True if the name is reserved, False otherwise.
    """
    return name in RESERVED_VOLUMES


def is_system_process(name: str) -> bool:
    """Check if a process name is a known macOS background service.

    Matching is exact and case-sensitive: "mds" is a system process,
    "mds2" and "MDS" are not.

    Args:
        name: Process name as reported by lsof.

    Returns:
        True if the process releases its handles on unmount.
    """
    return name in SYSTEM_PROCESSES
