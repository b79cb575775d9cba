"""Validator checking descriptors the way a Maven model validator does."""

import re

from dependency_installer.models import MODEL_VERSION, VALID_SCOPES, Descriptor
from dependency_installer.validators.base import BaseValidator

ID_PATTERN = re.compile(r"[A-Za-z0-9_\-.]+")

# Characters a version cannot hold since it names a repository directory.
INVALID_PATH_CHARS = "\\/:\"<>|?*"

RESERVED_SEGMENTS = (".", "..")


class ModelValidator(BaseValidator):
    """Checks required fields, id syntax and dependency entries."""

    def validate(self, descriptor: Descriptor) -> list[str]:
        errors: list[str] = []

        if descriptor.model_version != MODEL_VERSION:
            errors.append(
                f"'modelVersion' must be '{MODEL_VERSION}' "
                f"but is '{descriptor.model_version}'."
            )

        self._check_group_id(errors, "groupId", descriptor.group_id)
        self._check_id(errors, "artifactId", descriptor.artifact_id)
        self._check_required(errors, "packaging", descriptor.packaging)
        self._check_version(errors, "version", descriptor.version)

        seen: set[str] = set()
        for dependency in descriptor.dependencies or []:
            key = dependency.management_key
            self._check_group_id(errors, f"dependencies.dependency.groupId for {key}", dependency.group_id)
            self._check_id(errors, f"dependencies.dependency.artifactId for {key}", dependency.artifact_id)
            self._check_required(errors, f"dependencies.dependency.type for {key}", dependency.type)
            self._check_version(errors, f"dependencies.dependency.version for {key}", dependency.version)

            if dependency.scope not in VALID_SCOPES:
                errors.append(
                    f"'dependencies.dependency.scope' for {key} must be one of "
                    f"{', '.join(VALID_SCOPES)} but is '{dependency.scope}'."
                )

            if key in seen:
                errors.append(
                    f"'dependencies.dependency.(groupId:artifactId:type)' "
                    f"must be unique: {key}"
                )
            seen.add(key)

        return errors

    @staticmethod
    def _check_required(errors: list[str], field: str, value: str) -> bool:
        if not value or not value.strip():
            errors.append(f"'{field}' is missing.")
            return False
        return True

    def _check_id(self, errors: list[str], field: str, value: str) -> None:
        if self._check_required(errors, field, value) and (
            not ID_PATTERN.fullmatch(value) or value in RESERVED_SEGMENTS
        ):
            errors.append(
                f"'{field}' with value '{value}' does not match a valid id "
                f"pattern."
            )

    def _check_group_id(self, errors: list[str], field: str, value: str) -> None:
        # Every dot-separated part becomes a repository directory.
        if self._check_required(errors, field, value) and (
            not ID_PATTERN.fullmatch(value) or "" in value.split(".")
        ):
            errors.append(
                f"'{field}' with value '{value}' does not match a valid id "
                f"pattern."
            )

    def _check_version(self, errors: list[str], field: str, value: str) -> None:
        if not self._check_required(errors, field, value):
            return
        if value in RESERVED_SEGMENTS or any(c in value for c in INVALID_PATH_CHARS):
            errors.append(
                f"'{field}' must not be '.' or '..' and must not contain any of "
                f"these characters {INVALID_PATH_CHARS} but found '{value}'."
            )
