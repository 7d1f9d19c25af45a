# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Tests for autorelease.errors module."""

from __future__ import annotations

import dataclasses
import io

import pytest
from autorelease.errors import (
    ERRORS,
    AutoReleaseError,
    E,
    ErrorCode,
    ErrorInfo,
    explain,
    render_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_all_codes_have_ar_prefix(self) -> None:
        """Every error code must start with 'AR-'."""
        for code in ErrorCode:
            assert code.value.startswith('AR-'), f'{code.name} does not start with AR-'

    def test_no_duplicate_values(self) -> None:
        """Error code values must be unique."""
        values = [c.value for c in ErrorCode]
        assert len(values) == len(set(values))

    def test_e_alias(self) -> None:
        """E should be an alias for ErrorCode."""
        assert E is ErrorCode

    def test_is_str(self) -> None:
        """Codes compare equal to their string values."""
        assert E.RELEASE_NOT_FOUND == 'AR-RELEASE-NOT-FOUND'


class TestErrorInfo:
    """Tests for ErrorInfo dataclass."""

    def test_frozen(self) -> None:
        """ErrorInfo instances should be immutable."""
        info = ErrorInfo(code=E.CONFIG_NOT_FOUND, message='test')
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.message = 'changed'  # type: ignore[misc]

    def test_default_hint(self) -> None:
        """Hint should default to empty string."""
        assert ErrorInfo(code=E.CONFIG_NOT_FOUND, message='test').hint == ''


class TestAutoReleaseError:
    """Tests for AutoReleaseError."""

    def test_str_includes_code(self) -> None:
        """Test str includes code."""
        exc = AutoReleaseError(code=E.RELEASE_NOT_FOUND, message='Could not find any releases')
        assert str(exc) == '[AR-RELEASE-NOT-FOUND] Could not find any releases'

    def test_properties(self) -> None:
        """Test properties."""
        exc = AutoReleaseError(code=E.COMMIT_UNPARSABLE, message='bad', hint='fix it')
        assert exc.code is E.COMMIT_UNPARSABLE
        assert exc.message == 'bad'
        assert exc.hint == 'fix it'

    def test_is_exception(self) -> None:
        """Test is exception."""
        with pytest.raises(AutoReleaseError):
            raise AutoReleaseError(code=E.FORGE_REQUEST_FAILED, message='boom')


class TestCatalog:
    """Tests for ERRORS and explain()."""

    def test_catalog_keys_match_info(self) -> None:
        """Test catalog keys match info."""
        for code, info in ERRORS.items():
            assert info.code is code
            assert info.message

    def test_run_errors_documented(self) -> None:
        """Every error a release run can raise has an explanation."""
        for code in (
            E.VERSION_INVALID_FORMAT,
            E.COMMIT_UNPARSABLE,
            E.RELEASE_NOT_FOUND,
            E.RELEASE_NOT_ANNOTATED_TO_COMMIT,
            E.FORGE_REQUEST_FAILED,
        ):
            assert code in ERRORS

    def test_explain_known(self) -> None:
        """Test explain known."""
        text = explain('AR-RELEASE-NOT-FOUND')
        assert text is not None
        assert text.startswith('AR-RELEASE-NOT-FOUND: ')
        assert '  Hint: ' in text

    def test_every_code_documented(self) -> None:
        """Every code, config errors included, has a catalog entry."""
        assert set(ERRORS) == set(ErrorCode)
        for code in ErrorCode:
            text = explain(code.value)
            assert text is not None
            assert 'No detailed explanation' not in text

    def test_explain_unknown(self) -> None:
        """Test explain unknown."""
        assert explain('AR-NOPE') is None


class TestRenderError:
    """Tests for render_error."""

    def test_with_hint(self) -> None:
        """Test with hint."""
        buf = io.StringIO()
        render_error(
            AutoReleaseError(code=E.RELEASE_NOT_FOUND, message='No releases in octo/widgets', hint='Publish v0.1.0.'),
            file=buf,
        )
        out = buf.getvalue()
        assert 'error[AR-RELEASE-NOT-FOUND]: No releases in octo/widgets' in out
        assert '= hint: Publish v0.1.0.' in out
        assert '\x1b[' not in out

    def test_markup_escaped(self) -> None:
        """Test markup escaped."""
        buf = io.StringIO()
        render_error(AutoReleaseError(code=E.COMMIT_UNPARSABLE, message='subject [bold]x[/bold]'), file=buf)
        out = buf.getvalue()
        assert 'subject [bold]x[/bold]' in out
        assert 'hint' not in out
