"""Tests for the generic mandatory-field walker."""

import pytest
from pydantic import Field

from bundlecheck.models.spec import (
    OPTIONAL,
    Hook,
    Hooks,
    Linux,
    Mount,
    Process,
    Seccomp,
    Spec,
    SpecModel,
    Syscall,
    SyscallArg,
)
from bundlecheck.validation.mandatory import FieldRequirement, check_mandatory, describe_fields


def missing(owner: str, field: str) -> str:
    return f"'{owner}.{field}' should not be empty."


class Entry(SpecModel):
    name: str = ""
    weight: int = 0


class Registry(SpecModel):
    entries: dict[str, Entry] = Field(default_factory=dict)
    backup: Entry | None = None
    note: str | None = Field(default=None, json_schema_extra=OPTIONAL)
    tags: list[str] = Field(default_factory=list, json_schema_extra=OPTIONAL)


class TestDescribeFields:
    """Test the requirement descriptor table."""

    def test_required_and_optional_fields(self):
        table = {req.name: req for req in describe_fields(Process)}

        assert table["cwd"] == FieldRequirement(name="cwd", json_name="cwd", optional=False)
        assert table["args"].required is True
        assert table["env"].optional is True
        assert table["apparmor_profile"].json_name == "apparmorProfile"
        assert table["apparmor_profile"].optional is True

    def test_declaration_order(self):
        names = [req.json_name for req in describe_fields(Spec)]
        assert names == [
            "ociVersion", "platform", "process", "root", "hostname",
            "mounts", "hooks", "annotations", "linux",
        ]

    def test_fields_default_to_required(self):
        table = {req.name: req for req in describe_fields(Registry)}
        assert table["entries"].required
        assert table["backup"].required
        assert table["note"].optional

    def test_table_is_cached(self):
        assert describe_fields(Seccomp) is describe_fields(Seccomp)


class TestCheckMandatory:
    """Test check_mandatory walk semantics."""

    def test_complete_document_has_no_errors(self, valid_spec):
        assert check_mandatory(valid_spec) == []

    def test_empty_document(self):
        errors = check_mandatory(Spec())

        assert errors == [
            missing("Spec", "ociVersion"),
            missing("Platform", "os"),
            missing("Platform", "arch"),
            missing("Process", "args"),
            missing("Process", "cwd"),
            missing("Root", "path"),
        ]

    def test_non_model_values_are_ignored(self):
        assert check_mandatory("text") == []
        assert check_mandatory(None) == []
        assert check_mandatory({"a": 1}) == []

    @pytest.mark.parametrize("path, expected", [
        (("ociVersion",), missing("Spec", "ociVersion")),
        (("platform", "os"), missing("Platform", "os")),
        (("platform", "arch"), missing("Platform", "arch")),
        (("process", "cwd"), missing("Process", "cwd")),
        (("root", "path"), missing("Root", "path")),
    ])
    def test_single_missing_text_field(self, config_data, path, expected):
        target = config_data
        for key in path[:-1]:
            target = target[key]
        target[path[-1]] = ""

        assert check_mandatory(Spec.model_validate(config_data)) == [expected]

    def test_empty_required_sequence(self, config_data):
        config_data["process"]["args"] = []
        assert check_mandatory(Spec.model_validate(config_data)) == [missing("Process", "args")]

    def test_optional_fields_never_reported(self, config_data):
        config_data["hostname"] = ""
        config_data["mounts"] = []
        config_data["process"]["env"] = []
        config_data["process"]["capabilities"] = []
        config_data["linux"] = {}

        assert check_mandatory(Spec.model_validate(config_data)) == []

    def test_errors_use_immediate_owner_name(self, config_data):
        config_data["mounts"][1]["source"] = ""
        config_data["linux"]["namespaces"].append({"path": "/proc/1/ns/net"})

        errors = check_mandatory(Spec.model_validate(config_data))

        assert errors == [missing("Mount", "source"), missing("Namespace", "type")]

    def test_every_sequence_element_is_walked(self):
        hooks = Hooks(prestart=[Hook(path="/bin/a"), Hook(), Hook()])
        spec = Spec(
            version="1.0.0",
            platform={"os": "linux", "arch": "amd64"},
            process={"args": ["sh"], "cwd": "/"},
            root={"path": "rootfs"},
            hooks=hooks,
        )

        assert check_mandatory(spec) == [missing("Hook", "path"), missing("Hook", "path")]

    def test_present_optional_reference_is_walked(self):
        linux = Linux(seccomp=Seccomp(syscalls=[Syscall(args=[SyscallArg()])]))

        errors = check_mandatory(linux)

        assert errors == [
            missing("Seccomp", "defaultAction"),
            missing("Seccomp", "architectures"),
            missing("Syscall", "name"),
            missing("Syscall", "action"),
            missing("SyscallArg", "op"),
        ]

    def test_absent_optional_reference_not_reported(self):
        assert check_mandatory(Linux(seccomp=None)) == []

    def test_absent_required_reference_reported(self):
        errors = check_mandatory(Registry(entries={"a": Entry(name="a")}))
        assert errors == [missing("Registry", "backup")]

    def test_empty_required_mapping_reported(self):
        errors = check_mandatory(Registry(backup=Entry(name="b")))
        assert errors == [missing("Registry", "entries")]

    def test_mapping_values_are_walked(self):
        registry = Registry(
            entries={"a": Entry(name="a"), "b": Entry(), "c": Entry()},
            backup=Entry(),
        )

        errors = check_mandatory(registry)

        assert errors == [missing("Entry", "name")] * 3

    def test_numbers_are_never_missing(self):
        assert check_mandatory(Entry(name="x", weight=0)) == []

    def test_k_missing_fields_give_k_errors(self, config_data):
        config_data["ociVersion"] = ""
        config_data["process"]["cwd"] = ""
        config_data["mounts"][0]["destination"] = ""
        config_data["mounts"][0]["type"] = ""

        errors = check_mandatory(Spec.model_validate(config_data))

        assert len(errors) == 4
        assert len(set(errors)) == 4
        assert errors.count(missing("Mount", "destination")) == 1

    def test_walk_does_not_stop_at_first_error(self):
        mounts = [Mount(), Mount(destination="/x", type="bind", source="/y"), Mount()]
        spec = Spec(mounts=mounts)

        errors = check_mandatory(spec)

        assert errors.count(missing("Mount", "destination")) == 2
        assert errors.count(missing("Mount", "type")) == 2
        assert errors.count(missing("Mount", "source")) == 2
        assert len(errors) == 12
