"""
Tests for the action resolver — ordering, precedence, and degradation.
"""

import itertools

import pytest

from src.core.models import (
    ActionKind,
    Configuration,
    FeatureFlagSet,
    Item,
    RendererAvailability,
    TemplateType,
)
from src.core.services.action_resolver import InvalidInvocationError, resolve_actions
from src.core.services.feature_flags import (
    EDIT_HOVER_BUTTON_IN_TIMELINE,
    TIMELINE_SINGLE_ASSET_EDITOR,
)

HOVER = EDIT_HOVER_BUTTON_IN_TIMELINE
SINGLE = TIMELINE_SINGLE_ASSET_EDITOR


def _kinds(actions):
    return [a.kind for a in actions]


def _flags(**values):
    """Build a flag set from python-friendly names."""
    names = {"hover": HOVER, "single": SINGLE}
    return {names[k]: {"value": v} for k, v in values.items()}


class TestScenarios:
    """End-to-end scenarios for the resolver."""

    def test_no_flags_gives_save_and_baseline_edit(self, enabled_config):
        actions = resolve_actions(enabled_config, {}, Item(template_type_id="other"))
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY, ActionKind.EDIT]
        assert [a.key for a in actions] == ["save-to-library", "edit"]

    def test_hover_flag_gives_hover_edit(self, enabled_config):
        actions = resolve_actions(
            enabled_config, _flags(hover=True), Item(template_type_id="other"),
        )
        assert _kinds(actions) == [
            ActionKind.SAVE_TO_LIBRARY,
            ActionKind.EDIT_HOVER_TIMELINE,
        ]

    def test_single_asset_editor_wins_over_hover(self, enabled_config):
        actions = resolve_actions(
            enabled_config,
            _flags(single=True, hover=True),
            Item(template_type_id="other"),
            renderers={"single-asset-edit": True},
        )
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY, ActionKind.EDIT]
        assert actions[1].key == "single-asset-edit"

    def test_single_asset_editor_unavailable_no_fallback(self, enabled_config):
        actions = resolve_actions(
            enabled_config,
            _flags(single=True, hover=True),
            Item(template_type_id="other"),
            renderers={"single-asset-edit": False},
        )
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY]

    def test_single_asset_editor_undeclared_is_unavailable(self, enabled_config):
        actions = resolve_actions(
            enabled_config, _flags(single=True), Item(template_type_id="other"),
        )
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY]

    def test_disabled_library_project_file(self, disabled_config, ae_item):
        actions = resolve_actions(disabled_config, {}, ae_item)
        assert _kinds(actions) == [ActionKind.EDIT]


class TestSaveToLibrary:
    """Save eligibility rules."""

    @pytest.mark.parametrize(
        "template_type", [TemplateType.AE_PROJECT, TemplateType.PREMIERE_PROJECT],
    )
    def test_project_files_never_saved(self, enabled_config, template_type):
        item = Item(template_type_id=template_type.value)
        actions = resolve_actions(enabled_config, {}, item)
        assert ActionKind.SAVE_TO_LIBRARY not in _kinds(actions)

    @pytest.mark.parametrize("template_type", [
        "AE_PROJECT", "PREMIERE_PROJECT", " ae_project ", "Premiere_Project",
    ])
    def test_project_files_never_saved_in_any_case(self, enabled_config, template_type):
        for flags in ({}, _flags(hover=True), _flags(single=True)):
            actions = resolve_actions(
                enabled_config, flags, {"templateTypeId": template_type},
                renderers={"single-asset-edit": True},
            )
            assert ActionKind.SAVE_TO_LIBRARY not in _kinds(actions)

    def test_disabled_library_features_never_saved(self, disabled_config, video_item):
        actions = resolve_actions(disabled_config, {}, video_item)
        assert ActionKind.SAVE_TO_LIBRARY not in _kinds(actions)

    def test_unknown_template_type_is_saveable(self, enabled_config):
        item = Item(template_type_id="hologram")
        actions = resolve_actions(enabled_config, {}, item)
        assert actions[0].kind == ActionKind.SAVE_TO_LIBRARY

    def test_save_comes_first(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, _flags(hover=True), video_item)
        assert actions[0].key == "save-to-library"

    def test_save_renderer_switched_off(self, enabled_config, video_item):
        actions = resolve_actions(
            enabled_config, {}, video_item, renderers={"save-to-library": False},
        )
        assert _kinds(actions) == [ActionKind.EDIT]


class TestEditPrecedence:
    """Edit variants are mutually exclusive."""

    def test_baseline_edit_can_be_turned_off(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, {}, video_item, baseline_edit=False)
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY]

    def test_baseline_edit_off_does_not_affect_hover(self, enabled_config, video_item):
        actions = resolve_actions(
            enabled_config, _flags(hover=True), video_item, baseline_edit=False,
        )
        assert _kinds(actions)[-1] == ActionKind.EDIT_HOVER_TIMELINE

    def test_flags_explicitly_false_give_baseline(self, enabled_config, video_item):
        actions = resolve_actions(
            enabled_config, _flags(hover=False, single=False), video_item,
        )
        assert actions[-1].key == "edit"

    def test_hover_renderer_switched_off(self, enabled_config, video_item):
        actions = resolve_actions(
            enabled_config, _flags(hover=True), video_item,
            renderers={"edit-hover": False},
        )
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY]


class TestInvariants:
    """Properties that hold across every input combination."""

    TEMPLATE_TYPES = [
        "ae_project", "premiere_project", "AE_PROJECT", "Premiere_Project",
        "video", "image", "other",
    ]

    def _all_results(self):
        for disabled, hover, single, editor, baseline, ttype in itertools.product(
            [False, True], [False, True], [False, True], [False, True],
            [False, True], self.TEMPLATE_TYPES,
        ):
            config = Configuration(disable_library_features=disabled)
            flags = _flags(hover=hover, single=single)
            item = Item(template_type_id=ttype)
            renderers = {"single-asset-edit": editor}
            yield config, flags, item, renderers, baseline

    def test_at_most_one_edit_variant(self):
        edit_kinds = {ActionKind.EDIT, ActionKind.EDIT_HOVER_TIMELINE}
        for config, flags, item, renderers, baseline in self._all_results():
            actions = resolve_actions(config, flags, item, renderers, baseline)
            assert sum(1 for a in actions if a.kind in edit_kinds) <= 1

    def test_no_save_for_project_or_disabled(self):
        for config, flags, item, renderers, baseline in self._all_results():
            actions = resolve_actions(config, flags, item, renderers, baseline)
            is_project = item.template_type_id.casefold() in {"ae_project", "premiere_project"}
            if is_project or config.disable_library_features:
                assert ActionKind.SAVE_TO_LIBRARY not in _kinds(actions)

    def test_keys_unique(self):
        for config, flags, item, renderers, baseline in self._all_results():
            keys = [a.key for a in resolve_actions(config, flags, item, renderers, baseline)]
            assert len(keys) == len(set(keys))

    def test_idempotent(self):
        for config, flags, item, renderers, baseline in self._all_results():
            first = resolve_actions(config, flags, item, renderers, baseline)
            second = resolve_actions(config, flags, item, renderers, baseline)
            assert first == second

    def test_payload_is_the_item(self, enabled_config, video_item):
        for action in resolve_actions(enabled_config, {}, video_item):
            assert action.payload == video_item


class TestInputHandling:
    """Defaults, raw mappings, and invalid invocation."""

    def test_none_item_raises(self, enabled_config):
        with pytest.raises(InvalidInvocationError):
            resolve_actions(enabled_config, {}, None)

    def test_invalid_invocation_is_type_error(self, enabled_config):
        with pytest.raises(TypeError):
            resolve_actions(enabled_config, {}, None)

    def test_non_mapping_item_raises(self, enabled_config):
        with pytest.raises(InvalidInvocationError, match="str"):
            resolve_actions(enabled_config, {}, "video")

    def test_mapping_without_template_type_raises(self, enabled_config):
        with pytest.raises(InvalidInvocationError, match="Invalid item"):
            resolve_actions(enabled_config, {}, {"id": "x"})

    def test_raw_item_mapping(self, enabled_config):
        actions = resolve_actions(enabled_config, {}, {"templateTypeId": "premiere_project"})
        assert _kinds(actions) == [ActionKind.EDIT]
        assert actions[0].payload.template_type_id == "premiere_project"

    def test_none_config_means_library_enabled(self, video_item):
        actions = resolve_actions(None, {}, video_item)
        assert actions[0].kind == ActionKind.SAVE_TO_LIBRARY

    def test_raw_config_mapping(self, video_item):
        actions = resolve_actions({"disableLibraryFeatures": True}, {}, video_item)
        assert _kinds(actions) == [ActionKind.EDIT]

    def test_null_config_field_means_library_enabled(self, video_item):
        actions = resolve_actions({"disableLibraryFeatures": None}, {}, video_item)
        assert [a.key for a in actions] == ["save-to-library", "edit"]

    def test_invalid_config_falls_back_to_defaults(self, video_item):
        actions = resolve_actions({"disableLibraryFeatures": "sometimes"}, {}, video_item)
        assert [a.key for a in actions] == ["save-to-library", "edit"]

    def test_non_mapping_config_falls_back_to_defaults(self, ae_item):
        actions = resolve_actions(["disableLibraryFeatures"], {}, ae_item)
        assert _kinds(actions) == [ActionKind.EDIT]

    def test_none_flags(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, None, video_item)
        assert [a.key for a in actions] == ["save-to-library", "edit"]

    def test_bare_boolean_flags(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, {HOVER: True}, video_item)
        assert actions[-1].kind == ActionKind.EDIT_HOVER_TIMELINE

    def test_malformed_flag_reads_as_off(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, {HOVER: {"value": None}}, video_item)
        assert actions[-1].key == "edit"

    def test_non_mapping_flags_read_as_empty(self, enabled_config, video_item):
        actions = resolve_actions(enabled_config, [(HOVER, True)], video_item)
        assert [a.key for a in actions] == ["save-to-library", "edit"]

    def test_invalid_renderers_fall_back_to_defaults(self, enabled_config, video_item):
        actions = resolve_actions(
            enabled_config, _flags(single=True), video_item, renderers="everything",
        )
        assert _kinds(actions) == [ActionKind.SAVE_TO_LIBRARY]

    def test_model_inputs(self, enabled_config, video_item):
        flags = FeatureFlagSet.from_mapping({SINGLE: True})
        renderers = RendererAvailability.from_mapping({"single-asset-edit": True})
        actions = resolve_actions(enabled_config, flags, video_item, renderers)
        assert actions[-1].key == "single-asset-edit"
