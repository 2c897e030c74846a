"""Allow-lists and limits used by the semantic validation rules."""

# Linux kernel restriction on entries in /proc/<pid>/{uid,gid}_map
MAX_ID_MAPPINGS = 5

# Operating system -> supported architectures (GOOS/GOARCH naming)
VALID_PLATFORMS: dict[str, frozenset[str]] = {
    "darwin": frozenset({"386", "amd64", "arm", "arm64"}),
    "dragonfly": frozenset({"amd64"}),
    "freebsd": frozenset({"386", "amd64", "arm"}),
    "linux": frozenset({"386", "amd64", "arm", "arm64", "ppc64", "ppc64le", "mips64", "mips64le"}),
    "netbsd": frozenset({"386", "amd64", "arm"}),
    "openbsd": frozenset({"386", "amd64", "arm"}),
    "plan9": frozenset({"386", "amd64"}),
    "solaris": frozenset({"amd64"}),
    "windows": frozenset({"386", "amd64"}),
}

# See capabilities(7)
CAPABILITIES = frozenset({
    "CAP_CHOWN",
    "CAP_DAC_OVERRIDE",
    "CAP_DAC_READ_SEARCH",
    "CAP_FOWNER",
    "CAP_FSETID",
    "CAP_KILL",
    "CAP_SETGID",
    "CAP_SETUID",
    "CAP_SETPCAP",
    "CAP_LINUX_IMMUTABLE",
    "CAP_NET_BIND_SERVICE",
    "CAP_NET_BROADCAST",
    "CAP_NET_ADMIN",
    "CAP_NET_RAW",
    "CAP_IPC_LOCK",
    "CAP_IPC_OWNER",
    "CAP_SYS_MODULE",
    "CAP_SYS_RAWIO",
    "CAP_SYS_CHROOT",
    "CAP_SYS_PTRACE",
    "CAP_SYS_PACCT",
    "CAP_SYS_ADMIN",
    "CAP_SYS_BOOT",
    "CAP_SYS_NICE",
    "CAP_SYS_RESOURCE",
    "CAP_SYS_TIME",
    "CAP_SYS_TTY_CONFIG",
    "CAP_MKNOD",
    "CAP_LEASE",
    "CAP_AUDIT_WRITE",
    "CAP_AUDIT_CONTROL",
    "CAP_SETFCAP",
    "CAP_MAC_OVERRIDE",
    "CAP_MAC_ADMIN",
    "CAP_SYSLOG",
    "CAP_WAKE_ALARM",
    "CAP_BLOCK_SUSPEND",
    "CAP_AUDIT_READ",
})

RLIMITS = frozenset({
    "RLIMIT_CPU",
    "RLIMIT_FSIZE",
    "RLIMIT_DATA",
    "RLIMIT_STACK",
    "RLIMIT_CORE",
    "RLIMIT_RSS",
    "RLIMIT_NPROC",
    "RLIMIT_NOFILE",
    "RLIMIT_MEMLOCK",
    "RLIMIT_AS",
    "RLIMIT_LOCKS",
    "RLIMIT_SIGPENDING",
    "RLIMIT_MSGQUEUE",
    "RLIMIT_NICE",
    "RLIMIT_RTPRIO",
    "RLIMIT_RTTIME",
})

UTS_NAMESPACE = "uts"

NAMESPACE_TYPES = frozenset({"pid", "network", "mount", "ipc", UTS_NAMESPACE, "user"})

# block, character, unbuffered character, FIFO
DEVICE_TYPES = frozenset({"b", "c", "u", "p"})

# Empty means "not set"
ROOTFS_PROPAGATION_MODES = ("", "private", "rprivate", "slave", "rslave", "shared", "rshared")

# Empty default action is accepted as "not set"
SECCOMP_ACTIONS = frozenset({
    "",
    "SCMP_ACT_KILL",
    "SCMP_ACT_TRAP",
    "SCMP_ACT_ERRNO",
    "SCMP_ACT_TRACE",
    "SCMP_ACT_ALLOW",
})

SECCOMP_OPERATORS = frozenset({
    "SCMP_CMP_NE",
    "SCMP_CMP_LE",
    "SCMP_CMP_EQ",
    "SCMP_CMP_GE",
    "SCMP_CMP_GT",
    "SCMP_CMP_MASKED_EQ",
})

SECCOMP_ARCHITECTURES = frozenset({
    "SCMP_ARCH_X86",
    "SCMP_ARCH_X86_64",
    "SCMP_ARCH_X32",
    "SCMP_ARCH_ARM",
    "SCMP_ARCH_AARCH64",
    "SCMP_ARCH_MIPS",
    "SCMP_ARCH_MIPS64",
    "SCMP_ARCH_MIPS64N32",
    "SCMP_ARCH_MIPSEL",
    "SCMP_ARCH_MIPSEL64",
    "SCMP_ARCH_MIPSEL64N32",
    "SCMP_ARCH_PPC",
    "SCMP_ARCH_PPC64",
    "SCMP_ARCH_PPC64LE",
})

# Hook kinds in the order they are checked, mapped to the Hooks field names
HOOK_KINDS = (
    ("pre-start", "prestart"),
    ("post-start", "poststart"),
    ("post-stop", "poststop"),
)
