"""Tests for the model registry."""

import pytest

from gen_cli.core.exceptions import UnknownModelError, UnsupportedEditError
from gen_cli.models import (
    DEFAULT_MODEL,
    MODEL_ALIASES,
    MODELS,
    model_aliases_for,
    resolve_endpoint,
    resolve_model,
)


class TestModelRegistry:
    """Tests for registry constants."""

    def test_default_model_is_z_turbo(self) -> None:
        """Test that the default model is z-turbo."""
        assert DEFAULT_MODEL == "z-turbo"
        assert DEFAULT_MODEL in MODELS

    def test_every_entry_has_generation_path(self) -> None:
        """Test that every model can generate."""
        for name, entry in MODELS.items():
            assert entry.gen_path, name
            assert entry.name == name

    def test_z_turbo_has_no_edit(self) -> None:
        """Test that z-turbo is generation-only."""
        assert MODELS["z-turbo"].edit_path == ""
        assert MODELS["z-turbo"].supports_edit is False

    def test_nano_banana_models_use_aspect_ratio(self) -> None:
        """Test that nano-banana models size via aspect_ratio."""
        for name in ("nano-banana", "nano-banana-pro"):
            assert MODELS[name].size_param_name == "aspect_ratio"
            assert MODELS[name].supports_auto_size is True

    def test_aliases_point_at_registered_models(self) -> None:
        """Test that alias targets exist and do not chain."""
        for target in MODEL_ALIASES.values():
            assert target in MODELS
            assert target not in MODEL_ALIASES


class TestResolveModel:
    """Tests for resolve_model."""

    def test_resolve_direct_name(self) -> None:
        """Test resolving a canonical name."""
        assert resolve_model("qwen") is MODELS["qwen"]

    def test_resolve_alias(self) -> None:
        """Test that flux2 resolves to the flux2-pro entry."""
        assert resolve_model("flux2") == resolve_model("flux2-pro")

    def test_unknown_model_raises(self) -> None:
        """Test that an unknown name raises UnknownModelError."""
        with pytest.raises(UnknownModelError, match="unknown model 'dall-e'") as exc_info:
            resolve_model("dall-e")

        assert exc_info.value.details["model"] == "dall-e"
        assert "z-turbo" in exc_info.value.details["available"]


class TestResolveEndpoint:
    """Tests for resolve_endpoint."""

    def test_generate_uses_gen_path(self) -> None:
        """Test generation mode endpoint."""
        assert resolve_endpoint(MODELS["flux2-pro"], edit=False) == "fal-ai/flux-2-pro"

    def test_edit_uses_edit_path(self) -> None:
        """Test edit mode endpoint."""
        assert (
            resolve_endpoint(MODELS["nano-banana-pro"], edit=True)
            == "fal-ai/nano-banana-pro/edit"
        )

    def test_edit_unsupported_raises(self) -> None:
        """Test that editing with z-turbo raises UnsupportedEditError."""
        with pytest.raises(UnsupportedEditError, match="does not support editing"):
            resolve_endpoint(MODELS["z-turbo"], edit=True)

    def test_edit_unsupported_reports_requested_name(self) -> None:
        """Test that the error names the model the user typed."""
        with pytest.raises(UnsupportedEditError) as exc_info:
            resolve_endpoint(MODELS["z-turbo"], edit=True, requested_as="zt")

        assert exc_info.value.model == "zt"


class TestModelAliasesFor:
    """Tests for model_aliases_for."""

    def test_aliases_for_flux2_pro(self) -> None:
        """Test listing aliases of flux2-pro."""
        assert model_aliases_for("flux2-pro") == ["flux2"]

    def test_no_aliases(self) -> None:
        """Test a model without aliases."""
        assert model_aliases_for("qwen") == []
