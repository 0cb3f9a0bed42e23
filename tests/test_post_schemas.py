import pytest
from pydantic import ValidationError

from blogapi.models.base import new_id
from blogapi.schemas.post import CommentCreate, PostCreate


def test_post_is_trimmed_and_escaped():
    user_id = new_id()
    post = PostCreate(user_id=user_id, title="  <i>Notes</i> ", text=" On the engine ")
    assert post.user_id == user_id
    assert post.title == "&lt;i&gt;Notes&lt;&#x2F;i&gt;"
    assert post.text == "On the engine"


@pytest.mark.parametrize("title, text", [
    ("Hi", "Long enough"),
    ("Long enough", "ok"),
    ("   Hi   ", "Long enough"),
    ("x" * 201, "Long enough"),
])
def test_post_length_limits(title, text):
    with pytest.raises(ValidationError):
        PostCreate(user_id=new_id(), title=title, text=text)


def test_post_needs_well_formed_author_id():
    with pytest.raises(ValidationError) as info:
        PostCreate(user_id="42", title="Notes", text="On the engine")
    assert "Invalid ID" in str(info.value)


def test_comment_needs_text():
    for text in ["", "   "]:
        with pytest.raises(ValidationError):
            CommentCreate(user_id=new_id(), post_id=new_id(), text=text)
    assert CommentCreate(user_id=new_id(), post_id=new_id(), text=" ! ").text == "!"


def test_comment_needs_well_formed_ids():
    with pytest.raises(ValidationError):
        CommentCreate(user_id=new_id(), post_id=new_id().upper(), text="Nice one")
    with pytest.raises(ValidationError):
        CommentCreate(user_id="nobody", post_id=new_id(), text="Nice one")
