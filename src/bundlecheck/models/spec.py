"""Models for the bundle configuration document (config.json).

Every field carries an empty default so that incomplete documents still load;
missing required values are reported by the mandatory-field walker instead of
the parser. Fields that the runtime specification allows to be omitted are
marked with ``json_schema_extra=OPTIONAL``.
"""

from pydantic import BaseModel, ConfigDict, Field

OPTIONAL = {"optional": True}


class SpecModel(BaseModel):
    """Base for all document records: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Platform(SpecModel):
    """Target operating system and CPU architecture."""
    os: str = ""
    arch: str = ""


class Root(SpecModel):
    """Root filesystem reference, relative to the bundle directory."""
    path: str = ""
    readonly: bool = Field(default=False, json_schema_extra=OPTIONAL)


class User(SpecModel):
    """User the container process runs as."""
    uid: int = 0
    gid: int = 0
    additional_gids: list[int] = Field(alias="additionalGids", default_factory=list, json_schema_extra=OPTIONAL)


class Rlimit(SpecModel):
    """POSIX resource limit for the container process."""
    type: str = ""
    hard: int = 0
    soft: int = 0


class Process(SpecModel):
    """Container process description."""
    terminal: bool = Field(default=False, json_schema_extra=OPTIONAL)
    user: User = Field(default_factory=User)
    args: list[str] = Field(default_factory=list)
    env: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    cwd: str = ""
    capabilities: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    rlimits: list[Rlimit] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    no_new_privileges: bool = Field(alias="noNewPrivileges", default=False, json_schema_extra=OPTIONAL)
    apparmor_profile: str = Field(alias="apparmorProfile", default="", json_schema_extra=OPTIONAL)
    selinux_label: str = Field(alias="selinuxLabel", default="", json_schema_extra=OPTIONAL)


class Mount(SpecModel):
    """Additional filesystem mount."""
    destination: str = ""
    type: str = ""
    source: str = ""
    options: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)


class Hook(SpecModel):
    """Lifecycle hook command."""
    path: str = ""
    args: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    env: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    timeout: int | None = Field(default=None, json_schema_extra=OPTIONAL)


class Hooks(SpecModel):
    """Lifecycle hooks grouped by event."""
    prestart: list[Hook] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    poststart: list[Hook] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    poststop: list[Hook] = Field(default_factory=list, json_schema_extra=OPTIONAL)


class IDMapping(SpecModel):
    """User namespace id mapping."""
    host_id: int = Field(alias="hostID", default=0)
    container_id: int = Field(alias="containerID", default=0)
    size: int = 0


class Namespace(SpecModel):
    """Namespace to create or join (when ``path`` is set)."""
    type: str = ""
    path: str = Field(default="", json_schema_extra=OPTIONAL)


class Device(SpecModel):
    """Device node to create inside the container."""
    path: str = ""
    type: str = ""
    major: int = 0
    minor: int = 0
    file_mode: int | None = Field(alias="fileMode", default=None, json_schema_extra=OPTIONAL)
    uid: int | None = Field(default=None, json_schema_extra=OPTIONAL)
    gid: int | None = Field(default=None, json_schema_extra=OPTIONAL)


class SyscallArg(SpecModel):
    """Argument comparison rule of a seccomp syscall filter."""
    index: int = 0
    value: int = 0
    value_two: int = Field(alias="valueTwo", default=0)
    op: str = ""


class Syscall(SpecModel):
    """Seccomp rule for a single syscall."""
    name: str = ""
    action: str = ""
    args: list[SyscallArg] = Field(default_factory=list, json_schema_extra=OPTIONAL)


class Seccomp(SpecModel):
    """Seccomp profile."""
    default_action: str = Field(alias="defaultAction", default="")
    architectures: list[str] = Field(default_factory=list)
    syscalls: list[Syscall] = Field(default_factory=list, json_schema_extra=OPTIONAL)


class Linux(SpecModel):
    """Linux-specific section."""
    uid_mappings: list[IDMapping] = Field(alias="uidMappings", default_factory=list, json_schema_extra=OPTIONAL)
    gid_mappings: list[IDMapping] = Field(alias="gidMappings", default_factory=list, json_schema_extra=OPTIONAL)
    sysctl: dict[str, str] = Field(default_factory=dict, json_schema_extra=OPTIONAL)
    cgroups_path: str | None = Field(alias="cgroupsPath", default=None, json_schema_extra=OPTIONAL)
    namespaces: list[Namespace] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    devices: list[Device] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    seccomp: Seccomp | None = Field(default=None, json_schema_extra=OPTIONAL)
    rootfs_propagation: str = Field(alias="rootfsPropagation", default="", json_schema_extra=OPTIONAL)
    masked_paths: list[str] = Field(alias="maskedPaths", default_factory=list, json_schema_extra=OPTIONAL)
    readonly_paths: list[str] = Field(alias="readonlyPaths", default_factory=list, json_schema_extra=OPTIONAL)
    mount_label: str = Field(alias="mountLabel", default="", json_schema_extra=OPTIONAL)


class Spec(SpecModel):
    """Root of the bundle configuration document."""
    version: str = Field(alias="ociVersion", default="")
    platform: Platform = Field(default_factory=Platform)
    process: Process = Field(default_factory=Process)
    root: Root = Field(default_factory=Root)
    hostname: str = Field(default="", json_schema_extra=OPTIONAL)
    mounts: list[Mount] = Field(default_factory=list, json_schema_extra=OPTIONAL)
    hooks: Hooks = Field(default_factory=Hooks)
    annotations: dict[str, str] = Field(default_factory=dict, json_schema_extra=OPTIONAL)
    linux: Linux = Field(default_factory=Linux)
