"""
Test Profile Service
Partial updates, uniqueness on update, deletion and the child records.
"""
import pytest
import pytest_asyncio
from folio.modules.users.exceptions import DuplicateIdentity, RecordNotFound
from folio.modules.users.services.profile_service import ProfileChanges


@pytest_asyncio.fixture
async def ann(auth_service, user_store, registration):
    result = await auth_service.register(registration())
    return user_store.users[result.user.id]


@pytest_asyncio.fixture
async def bob(auth_service, user_store, registration):
    result = await auth_service.register(registration(name="Bob", username="bob", email="bob@x.com"))
    return user_store.users[result.user.id]


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(profile_service, user_store, ann):
    result = await profile_service.update_profile(ann, ProfileChanges(email="ann2@x.com"))

    assert result.success is True
    assert result.message == "Profile updated successfully"
    assert result.token is None

    stored = user_store.users[ann.id]
    assert stored.email == "ann2@x.com"
    assert stored.name == "Ann"
    assert stored.username == "ann"
    assert stored.password_hash == ann.password_hash


@pytest.mark.asyncio
async def test_empty_strings_mean_unchanged(profile_service, user_store, ann):
    result = await profile_service.update_profile(ann, ProfileChanges(name="", username="", email=""))

    assert result.success is True
    assert user_store.users[ann.id] == ann


@pytest.mark.asyncio
async def test_no_op_update_succeeds(profile_service, ann):
    result = await profile_service.update_profile(ann, ProfileChanges())
    assert result.success is True
    assert result.user.username == "ann"


@pytest.mark.asyncio
async def test_same_username_is_not_a_conflict(profile_service, ann):
    result = await profile_service.update_profile(ann, ProfileChanges(username="ann", email="ann@x.com"))
    assert result.success is True


@pytest.mark.asyncio
async def test_taken_username_rejected_without_writing(profile_service, user_store, ann, bob):
    with pytest.raises(DuplicateIdentity) as exc:
        await profile_service.update_profile(bob, ProfileChanges(username="ann", name="Robert"))

    assert exc.value.message == "User with the same username already exists"
    assert user_store.users[bob.id] == bob


@pytest.mark.asyncio
async def test_taken_email_rejected(profile_service, ann, bob):
    with pytest.raises(DuplicateIdentity) as exc:
        await profile_service.update_profile(bob, ProfileChanges(email="ann@x.com"))
    assert exc.value.field == "email"


@pytest.mark.asyncio
async def test_username_change_issues_new_token(profile_service, auth_service, ann):
    result = await profile_service.update_profile(ann, ProfileChanges(username="annie"))

    assert result.token
    user = await auth_service.authenticate(result.token)
    assert user.id == ann.id
    assert user.username == "annie"


@pytest.mark.asyncio
async def test_delete_account_removes_everything(profile_service, user_store, profile_store, ann):
    await profile_service.add_skill(ann.id, "python")

    assert await profile_service.delete_account(ann) is True
    assert ann.id not in user_store.users
    assert ann.id not in profile_store.socials
    assert ann.id not in profile_store.skills


@pytest.mark.asyncio
async def test_socials_created_on_read_when_missing(profile_service, profile_store, ann):
    del profile_store.socials[ann.id]

    socials = await profile_service.get_socials(ann.id)

    assert socials.links == {}
    assert ann.id in profile_store.socials


@pytest.mark.asyncio
async def test_contact_created_on_read_when_missing(profile_service, profile_store, ann):
    del profile_store.contacts[ann.id]

    contact = await profile_service.get_contact(ann.id)

    assert contact.phone == ""
    assert ann.id in profile_store.contacts


@pytest.mark.asyncio
async def test_update_socials_normalizes(profile_service, ann):
    await profile_service.update_socials(ann.id, {" GitHub ": "https://github.com/ann", "twitter": ""})

    socials = await profile_service.get_socials(ann.id)
    assert socials.links == {"github": "https://github.com/ann"}
    assert socials.url_for("github") == "https://github.com/ann"
    assert socials.to_dict()["github"] == "https://github.com/ann"
    assert socials.to_dict()["twitter"] == ""


@pytest.mark.asyncio
async def test_update_contact(profile_service, ann):
    await profile_service.update_contact(ann.id, {"phone": "555-0100", "website": "https://ann.dev"})

    contact = await profile_service.get_contact(ann.id)
    assert contact.phone == "555-0100"
    assert contact.website == "https://ann.dev"
    assert contact.address == ""


@pytest.mark.asyncio
async def test_education_lifecycle(profile_service, ann):
    first = await profile_service.add_education(ann.id, {"level": "BSc", "school_name": "MIT", "from_year": 2010, "to_year": 2014})
    await profile_service.add_education(ann.id, {"level": "MSc", "school_name": "ETH"})

    entries = await profile_service.list_education(ann.id)
    assert [e.level for e in entries] == ["BSc", "MSc"]

    await profile_service.delete_education(ann.id, first.id)
    assert [e.level for e in await profile_service.list_education(ann.id)] == ["MSc"]

    with pytest.raises(RecordNotFound):
        await profile_service.delete_education(ann.id, first.id)

    replaced = await profile_service.replace_education(ann.id, [{"level": "PhD"}])
    assert [e.level for e in replaced] == ["PhD"]


@pytest.mark.asyncio
async def test_education_scoped_to_owner(profile_service, ann, bob):
    entry = await profile_service.add_education(ann.id, {"level": "BSc"})

    with pytest.raises(RecordNotFound):
        await profile_service.delete_education(bob.id, entry.id)


@pytest.mark.asyncio
async def test_skills(profile_service, ann):
    await profile_service.add_skill(ann.id, "python")
    skills = await profile_service.add_skill(ann.id, " python ")
    assert skills.skills == ["python"]

    await profile_service.add_skill(ann.id, "sql")
    skills = await profile_service.remove_skill(ann.id, "python")
    assert skills.skills == ["sql"]

    with pytest.raises(RecordNotFound):
        await profile_service.remove_skill(ann.id, "python")
    with pytest.raises(ValueError):
        await profile_service.add_skill(ann.id, "   ")


@pytest.mark.asyncio
async def test_get_profile_aggregates(profile_service, ann):
    await profile_service.add_skill(ann.id, "python")

    profile = await profile_service.get_profile(ann)

    assert profile["user"]["username"] == "ann"
    assert "password_hash" not in profile["user"]
    assert profile["skills"] == ["python"]
    assert profile["education"] == []
    assert profile["socials"]["github"] == ""
