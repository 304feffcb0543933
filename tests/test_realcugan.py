import base64

from zbplugins.realcugan import build_payload, model_name, select_model


def test_default_is_double_conservative():
    assert select_model("清晰术", 100, 100) == (2, "conservative")


def test_triple_strong_on_small_image():
    assert select_model("清晰术三重吟唱强力术式", 100, 100) == (3, "denoise3x")


def test_large_image_stays_double():
    scale, _ = select_model("清晰术四重吟唱", 1000, 1000)
    assert scale == 2


def test_medium_branch_depends_on_scale():
    assert select_model("中等术式", 10, 10)[1] == "denoise2x"
    assert select_model("四重吟唱中等术式", 10, 10) == (4, "no-denoise")


def test_weak_branch():
    assert select_model("弱术式", 10, 10)[1] == "denoise1x"
    assert select_model("三重吟唱弱术式", 10, 10)[1] == "no-denoise"


def test_unchanged_branch():
    assert select_model("不变式", 10, 10)[1] == "no-denoise"


def test_model_name():
    assert model_name(2, "conservative") == "up2x-latest-conservative.pth"


def test_payload_round_trip():
    data = b"\xff\xd8imagebytes"
    payload = build_payload(data, "up3x-latest-denoise3x.pth")
    encoded, model, flag = payload["data"]
    assert encoded.startswith("data:image/jpeg;base64,")
    assert base64.b64decode(encoded.split(",", 1)[1]) == data
    assert model == "up3x-latest-denoise3x.pth"
    assert flag == 2