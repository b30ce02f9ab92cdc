from hint_app.hints.controller import HintController
from hint_app.hints.lifecycle import HintMount, mounted


def test_hint_mount_attach_and_detach_are_idempotent():
    controller = HintController()
    mount = HintMount(controller, "card", 3)

    mount.attach()
    mount.attach()
    assert mount.attached
    assert mount.active
    assert controller.snapshot()["registered"] == [{"id": "card", "priority": 3, "sequence": 0}]

    mount.detach()
    mount.detach()
    assert not mount.attached
    assert controller.active_hint() is None


def test_hint_mount_dismiss_marks_viewed():
    controller = HintController()
    with HintMount(controller, "card") as mount:
        mount.dismiss()
        assert mount.viewed
        assert not mount.active
    assert not controller.is_registered("card")
    assert controller.is_viewed("card")


def test_mounted_context_unregisters_on_error():
    controller = HintController()
    try:
        with mounted(controller, "chart", 1) as mount:
            assert mount.active
            raise RuntimeError("render failed")
    except RuntimeError:
        pass

    assert not controller.is_registered("chart")
    assert controller.active_hint() is None


def test_nested_mounts_activate_in_priority_order():
    controller = HintController()
    with mounted(controller, "outer", 5):
        with mounted(controller, "inner", 1):
            assert controller.active_hint() == "inner"
        assert controller.active_hint() == "outer"
