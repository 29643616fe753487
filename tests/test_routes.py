"""Integration tests for routes."""


def test_home_page(client):
    """Home page is accessible without certificate."""
    response = client.get("/")
    assert response.is_success
    assert "Dinner Party" in response.body


def test_play_requires_cert(client):
    """Play page requires a client certificate."""
    response = client.get("/play")
    assert response.is_certificate_required


def test_play_with_cert(auth_client):
    """A new player starts in the kitchen with the intro."""
    response = auth_client.get("/play")
    assert response.is_success
    assert "# Kitchen" in response.body
    assert "Good luck!" in response.body
    assert "16:30 (90 minutes remaining)" in response.body


def test_go_exit(auth_client):
    """Going through an exit via /go/ moves the player."""
    response = auth_client.get("/go/hall")
    assert response.is_success
    assert "# Hall" in response.body
    assert "=> /go/high-street Go to the high street" in response.body


def test_go_multi_word_exit(auth_client):
    auth_client.get("/go/hall")
    response = auth_client.get("/go/dining-room")
    assert response.is_success
    assert "# Dining Room" in response.body


def test_cmd_input_prompt(auth_client):
    """The /cmd route prompts for input when no query."""
    response = auth_client.get("/cmd")
    assert response.is_input_required


def test_cmd_with_input(auth_client):
    """The /cmd route processes commands."""
    response = auth_client.get_input("/cmd", "take tofu")
    assert response.is_success
    assert "You take the block of tofu." in response.body
    assert "16:31 (89 minutes remaining)" in response.body


def test_inventory_route(auth_client):
    """The /inventory route shows inventory."""
    response = auth_client.get("/inventory")
    assert response.is_success
    assert "carrying nothing" in response.body


def test_time_route(auth_client):
    response = auth_client.get("/time")
    assert response.is_success
    assert "16:30" in response.body


def test_look_route(auth_client):
    """The /look route works."""
    response = auth_client.get("/look")
    assert response.is_success
    assert "brushed steel" in response.body


def test_help_page(client):
    """Help page is accessible."""
    response = client.get("/help")
    assert response.is_success
    assert "commands" in response.body.lower()


def test_about_page(client):
    response = client.get("/about")
    assert response.is_success
    assert "Gemini" in response.body


def test_recipe_page(client):
    response = client.get("/recipe")
    assert response.is_success
    assert "Ottolenghi" in response.body


def test_new_game_prompt(auth_client):
    """The /new route prompts for confirmation."""
    response = auth_client.get("/new")
    assert response.is_input_required


def test_new_game_confirmed(auth_client):
    auth_client.get("/go/hall")
    response = auth_client.get_input("/new", "yes")
    assert response.is_success
    assert "# Kitchen" in response.body


def test_finished_game(auth_client):
    response = auth_client.get_input("/cmd", "wait 90")
    assert response.is_success
    assert "You scored 0 out of 200 points." in response.body
    assert "=> /new Start a new dinner party" in response.body
