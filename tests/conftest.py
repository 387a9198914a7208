import hypothesis
import pytest

import limb

# no deadline: the portable backend is slow on the first examples
hypothesis.settings.register_profile("ci", deadline=None, max_examples=200)
hypothesis.settings.load_profile("ci")

@pytest.fixture(params=["native", "portable"])
def backend(request, monkeypatch):
	"Run the test once per limb backend"
	if request.param == "portable":
		monkeypatch.setattr(limb, "umul64", limb._umul64_portable)
		monkeypatch.setattr(limb, "clz64", limb._clz64_portable)
	else:
		monkeypatch.setattr(limb, "umul64", limb._umul64_native)
		monkeypatch.setattr(limb, "clz64", limb._clz64_native)
	return request.param
