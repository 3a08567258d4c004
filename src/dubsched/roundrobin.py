"""Circle-method round generation for fixed teams and rotating partners."""

from collections import defaultdict

from dubsched.models import BYE, Court, Game, Round


def form_fixed_teams(players: list[str]) -> list[tuple[str, str]]:
    """Pair players positionally: (0, 1), (2, 3), ...

    A trailing unpaired player is ignored.
    """
    return [(players[i], players[i + 1]) for i in range(0, len(players) - 1, 2)]


def _circle_opponent(i: int, r: int, size: int) -> int:
    """Slot that slot `i` meets in round `r` of a circle of `size` slots.

    Slot size-1 is the pivot; any slot whose computed opponent is itself
    meets the pivot instead.
    """
    j = (size - 1 - i + r) % (size - 1)
    return size - 1 if j == i else j


def generate_fixed_rounds(players: list[str], courts: list[Court]) -> list[Round]:
    """Round-robin over fixed teams formed from positional pairs.

    For M teams: M-1 rounds of M/2 games when M is even. An odd team count
    gets a bye slot, so M rounds with one idle team each.
    Every team meets every other team exactly once. Deterministic.
    """
    teams = form_fixed_teams(players)
    m = len(teams)
    if m < 2 or not courts:
        return []

    # Odd team count: the extra slot is the bye
    size = m + 1 if m % 2 == 1 else m

    rounds = []
    for r in range(size - 1):
        games = []
        byes = []
        for i in range(size - 1):
            j = _circle_opponent(i, r, size)
            if j < i:
                continue  # already emitted from the other side
            if j >= m:
                byes.extend(teams[i])
                continue
            games.append(Game(
                court=courts[len(games) % len(courts)],
                team1=teams[i],
                team2=teams[j],
            ))
        rounds.append(Round(number=r + 1, games=games, byes=byes))

    return rounds


def generate_solo_rounds(players: list[str], courts: list[Court]) -> list[Round]:
    """Rotate partners every round with the circle method applied to players.

    Player i is paired with player n-1-i in the current ordering; consecutive
    pairs face each other. An odd count is padded with a bye placeholder and
    pairs touching it are dropped. A round that ends up with no games is
    skipped rather than emitted empty, so round numbers stay contiguous.
    """
    if len(players) < 4 or not courts:
        return []

    order = list(players)
    if len(order) % 2 == 1:
        order.append(BYE)
    n = len(order)

    rounds = []
    for _ in range(n - 1):
        pairs = []
        byes = []
        for i in range(n // 2):
            p1 = order[i]
            p2 = order[n - 1 - i]
            if p1 == BYE:
                byes.append(p2)
            elif p2 == BYE:
                byes.append(p1)
            else:
                pairs.append((p1, p2))

        games = []
        for k in range(len(pairs) // 2):
            games.append(Game(
                court=courts[k % len(courts)],
                team1=pairs[2 * k],
                team2=pairs[2 * k + 1],
            ))
        # An odd number of surviving pairs leaves one pair idle
        for pair in pairs[2 * len(games):]:
            byes.extend(pair)

        if games:
            rounds.append(Round(number=len(rounds) + 1, games=games, byes=byes))

        # Rotate: keep position 0 fixed, last moves to position 1
        order = [order[0]] + [order[-1]] + order[1:-1]

    return rounds


def _check_double_booking(rnd: Round, errors: list[str]) -> None:
    seen = set()
    for g in rnd.games:
        for p in g.players():
            if p in seen:
                errors.append(f"Round {rnd.number}: {p} appears twice")
            seen.add(p)


def verify_fixed_round_robin(rounds: list[Round], players: list[str]) -> dict:
    """Verify a fixed-team schedule is valid and complete.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - matchup_counts: dict of (team, team) -> count
    - games_per_team: dict of team -> game count
    """
    teams = form_fixed_teams(players)
    errors = []
    matchup_counts: dict[tuple, int] = defaultdict(int)
    games_per_team: dict[tuple, int] = {t: 0 for t in teams}

    for rnd in rounds:
        _check_double_booking(rnd, errors)
        for g in rnd.games:
            for team in (g.team1, g.team2):
                if team not in games_per_team:
                    errors.append(
                        f"Round {rnd.number}: {' & '.join(team)} is not a fixed team"
                    )
                    continue
                games_per_team[team] += 1
            key = tuple(sorted([g.team1, g.team2]))
            matchup_counts[key] += 1

    # Every pair of teams meets exactly once
    for i, t1 in enumerate(teams):
        for t2 in teams[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = matchup_counts.get(key, 0)
            if count != 1:
                errors.append(
                    f"{' & '.join(t1)} vs {' & '.join(t2)}: "
                    f"played {count} times (expected 1)"
                )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "matchup_counts": dict(matchup_counts),
        "games_per_team": games_per_team,
    }


def verify_solo_rounds(rounds: list[Round], players: list[str]) -> dict:
    """Verify a rotating-partner schedule.

    Checks that nobody is double-booked and no partnership repeats.
    Returns dict with valid, errors, partner_counts and games_per_player.
    """
    errors = []
    partner_counts: dict[tuple[str, str], int] = defaultdict(int)
    games_per_player: dict[str, int] = {p: 0 for p in players}

    for rnd in rounds:
        _check_double_booking(rnd, errors)
        for g in rnd.games:
            for team in (g.team1, g.team2):
                key = tuple(sorted(team))
                partner_counts[key] += 1
            for p in g.players():
                games_per_player[p] = games_per_player.get(p, 0) + 1

    for (a, b), count in sorted(partner_counts.items()):
        if count > 1:
            errors.append(f"{a} & {b}: partnered {count} times")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "partner_counts": dict(partner_counts),
        "games_per_player": games_per_player,
    }
