import kgeneric


def test_declared_public_interface_and_promised_defaults():
    settings = kgeneric.AccessSettings()
    assert settings.networking.request_timeout == 5 * 60
    assert settings.networking.connect_timeout is None
    assert settings.networking.error_backoffs == ()
    assert settings.discovery.caching == True


def test_settings_are_not_shared_between_instances():
    settings1 = kgeneric.AccessSettings()
    settings2 = kgeneric.AccessSettings()
    settings1.networking.request_timeout = 1
    settings1.discovery.caching = False
    assert settings2.networking.request_timeout == 5 * 60
    assert settings2.discovery.caching == True
