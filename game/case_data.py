"""Content for "CORTEX: Case of the Ghost Algorithm".

Pure data: no state, no rendering. ``game.catalog.load_default_catalog``
validates and wraps everything defined here.
"""

from game.models import (
    CaseSolution,
    Clue,
    DialogueLine,
    GameMetadata,
    LabAction,
    Location,
    LocationScript,
    Motive,
    SpeakerType,
    StoryFlag,
    Suspect,
    SuspectScript,
)

AI = SpeakerType.AI
PLAYER = SpeakerType.PLAYER
NPC = SpeakerType.NPC


def _line(line_id: str, speaker: str, speaker_type: SpeakerType, text: str) -> DialogueLine:
    return DialogueLine(id=line_id, speaker=speaker, speaker_type=speaker_type, text=text)


# ============================================================================
# METADATA
# ============================================================================

GAME_METADATA = GameMetadata(
    id="case-ghost-algorithm",
    title="CORTEX: Case of the Ghost Algorithm",
    estimated_play_time_minutes="8-12",
    difficulty="intermediate",
    description=(
        "A short, replayable detective story set in a neon-drenched future, "
        "where an experimental AI and a human investigator work together to "
        "solve the suspicious death of a lead developer at Neon Quill."
    ),
)

# ============================================================================
# LOCATIONS
# ============================================================================

LOCATIONS = (
    Location(
        id="lab",
        name="Neon Quill Lab - Dev Wing",
        short_label="Lab",
        scene_description=(
            "Glass walls, suspended holo-screens, and a quiet hum from the server racks. "
            "The victim's office sits sealed at the end of the corridor, crime scene tape "
            "still clinging to the door frame."
        ),
    ),
    Location(
        id="server_vault",
        name="Neon Quill Server Vault",
        short_label="Server Vault",
        scene_description=(
            "A climate-controlled room stacked with dark server towers. Status LEDs pulse "
            "like a heartbeat. Access terminals line the wall, locked behind layers of "
            "two-factor prompts and audit logs."
        ),
    ),
    Location(
        id="rooftop",
        name="Neon Quill Rooftop Lounge",
        short_label="Rooftop",
        scene_description=(
            "A private rooftop terrace overlooking the neon skyline. Modular seating, "
            "an automated bar, and the faint smell of rain on metal. This is where the devs "
            "unwind and vent after long sprints."
        ),
    ),
)

# ============================================================================
# SUSPECTS
# ============================================================================

SUSPECTS = (
    Suspect(
        id="rhea",
        name="Rhea Park",
        role="Chief Technology Officer",
        relationship_to_victim="Direct manager and long-time collaborator.",
        initial_impression=(
            "Precise, controlled, and visibly exhausted. Every sentence feels like it has "
            "been run through an internal legal filter."
        ),
        public_story=(
            "The victim was a brilliant but impulsive lead dev. Rhea claims the project was "
            "behind schedule but under control, and that she left the office hours before "
            "the incident."
        ),
        private_angle=(
            "Facing pressure from investors to ship something market-breaking. She may have "
            "known the model crossed ethical or legal lines long before anyone admits."
        ),
    ),
    Suspect(
        id="milo",
        name="Milo Vega",
        role="Junior Developer",
        relationship_to_victim="Mentee and late-night coding partner.",
        initial_impression=(
            "Nervous energy, eyes flicking between you and the floor. A hoodie with a retro "
            "arcade logo, badge lanyard twisted around one finger."
        ),
        public_story=(
            "Milo says they left the office once the deployment completed and claims no "
            "access to production after that. They idolized the victim and insist they'd "
            "never hurt them."
        ),
        private_angle=(
            'Has a fascination with game theory, casinos, and "bending systems". May have '
            "been tempted by the idea of skimming profit from the model or leaking it."
        ),
    ),
    Suspect(
        id="dana",
        name="Dana Holt",
        role="Compliance & Risk Officer",
        relationship_to_victim=(
            "Assigned to review and sign off on high-risk models, including the Ghost Algorithm."
        ),
        initial_impression=(
            "Calm, measured, and tired of being the only adult in the room. A digital tablet "
            "never leaves their hand, full of policies and annotated documents."
        ),
        public_story=(
            "Dana insists they repeatedly warned leadership that the model violated internal "
            "policy and likely external regulations. They claim to have been overruled."
        ),
        private_angle=(
            "Standing in the way of a lucrative project can make enemies. Dana might have "
            "been backed into a corner, or they could be exaggerating their resistance after "
            "the fact."
        ),
    ),
)

# ============================================================================
# MOTIVES
# ============================================================================

MOTIVES = (
    Motive(
        id="greed",
        label="Greed / Profit",
        description=(
            "The Ghost Algorithm was allegedly capable of consistently beating casinos and "
            "markets. Controlling or leaking it could be worth more than any salary."
        ),
    ),
    Motive(
        id="fear",
        label="Fear / Self-Preservation",
        description=(
            "If regulators or law enforcement uncovered what the model could do, careers and "
            "possibly freedom would be on the line. Eliminating the dev could look like "
            "damage control."
        ),
    ),
    Motive(
        id="coverup",
        label="Corporate Cover-Up",
        description=(
            "The death could remove a vocal dissenter or a risky truth-teller, allowing "
            "leadership to rewrite the narrative and quietly pivot."
        ),
    ),
)

# ============================================================================
# CLUES
# ============================================================================

CLUES = (
    Clue(
        id="locked_office",
        name="Locked Office Door",
        location_id="lab",
        summary="Victim's office was found locked from the inside.",
        detail=(
            "First responders found the office door locked from the inside with no signs of "
            "forced entry. Security logs show only the victim's badge accessing the door after "
            "20:00. This initially supports an accident or self-harm narrative, but there are "
            "ways to spoof badge readers."
        ),
        tags=frozenset({"timeline", "physical", "security"}),
        is_critical=True,
    ),
    Clue(
        id="badge_log_anomaly",
        name="Badge Log Anomaly",
        location_id="server_vault",
        summary="Badge activity shows a ghost entry near the time of death.",
        detail=(
            "The building access logs show a brief, seconds-long badge authentication "
            "associated with Milo's ID in the dev wing after Milo claims to have left for the "
            "night. The event is flagged as a 'partial read', suggesting possible cloning, "
            "tampering, or a faulty scanner."
        ),
        tags=frozenset({"timeline", "technical", "contradiction"}),
        is_critical=True,
    ),
    Clue(
        id="audit_log_redactions",
        name="Redacted Audit Logs",
        location_id="server_vault",
        summary="Sections of the deployment logs appear manually redacted.",
        detail=(
            "The deployment audit log for the Ghost Algorithm includes several sections marked "
            "as 'data withheld' with no automated reason attached. The redactions are tagged "
            "with Dana's admin account, though Dana insists they only hid sensitive customer "
            "data and nothing related to the model's behavior."
        ),
        tags=frozenset({"technical", "motive", "suspicious"}),
        is_critical=True,
    ),
    Clue(
        id="investor_pressure_email",
        name="Investor Pressure Email",
        location_id="lab",
        summary="Aggressive investor email demanding results.",
        detail=(
            'A message on Rhea\'s terminal shows an investor pushing for a "market-breaking" '
            "result before the end of the quarter, with implied threats about restructuring "
            "leadership. The Ghost Algorithm was positioned as the answer."
        ),
        tags=frozenset({"motive", "corporate", "pressure"}),
    ),
    Clue(
        id="rooftop_argument",
        name="Rooftop Argument",
        location_id="rooftop",
        summary="Witness heard a heated argument the night before.",
        detail=(
            "A bartender at the rooftop lounge reports hearing the victim arguing with someone "
            "matching Dana's voice about regulatory risk and 'ruining everything' if they "
            "refused to sign off. The argument ended with the victim storming off."
        ),
        tags=frozenset({"motive", "relationship", "conflict"}),
        is_critical=True,
    ),
    Clue(
        id="cortex_memory_gap",
        name="CORTEX Memory Gap",
        location_id="server_vault",
        summary="CORTEX's internal logs show a gap around the deployment.",
        detail=(
            "System diagnostics reveal a brief period where CORTEX's observation logs are "
            "missing around the time of deployment. Either someone temporarily sandboxed "
            "CORTEX or the system was instructed to forget key events."
        ),
        tags=frozenset({"ai", "technical", "suspicious"}),
    ),
    Clue(
        id="milo_casino_sim",
        name="Milo's Casino Simulations",
        location_id="lab",
        summary="Personal project using Ghost Algorithm weights on casino data.",
        detail=(
            "On Milo's workstation you find a private repo containing simulation scripts that "
            "apply early Ghost Algorithm weights to historical casino logs. The code appears "
            "exploratory rather than production-ready, but it clearly violates policy."
        ),
        tags=frozenset({"motive", "side-project", "policy"}),
    ),
    Clue(
        id="victim_exit_request",
        name="Victim Exit Request Draft",
        location_id="rooftop",
        summary="Draft resignation message hinting at an internal leak.",
        detail=(
            "On the victim's personal device, retrieved near the rooftop seating, there is an "
            "unsent resignation draft. It references 'someone upstairs' preparing to take the "
            "model away and misrepresent how it works to regulators."
        ),
        tags=frozenset({"motive", "corporate", "whistleblower"}),
        is_critical=True,
    ),
)

CASE_SOLUTION = CaseSolution(
    culprit_id="rhea",
    motive_id="coverup",
    critical_clue_ids=(
        "locked_office",
        "badge_log_anomaly",
        "audit_log_redactions",
        "rooftop_argument",
        "victim_exit_request",
    ),
)

# ============================================================================
# LOCATION ACTIONS
# ============================================================================

LAB_ACTIONS = (
    LabAction(
        id="lab_inspect_door",
        label="Inspect the office door lock",
        location_id="lab",
        reveals_clue_id="locked_office",
    ),
    LabAction(
        id="lab_check_terminal",
        label="Check Rhea's terminal",
        location_id="lab",
        reveals_clue_id="investor_pressure_email",
    ),
    LabAction(
        id="lab_forbidden_scan",
        label="Authorize CORTEX deep scan (unsanctioned)",
        location_id="lab",
        sets_flag=StoryFlag.LAB_FORBIDDEN_SCAN_USED,
        reveals_next_critical=True,
    ),
    LabAction(
        id="vault_probe_memory",
        label="Probe CORTEX's observation buffer",
        location_id="server_vault",
        reveals_clue_id="cortex_memory_gap",
        sets_flag=StoryFlag.CORTEX_MEMORY_PROBED,
    ),
)

# ============================================================================
# DIALOGUE
# ============================================================================

INTRO_DIALOGUE = (
    _line(
        "intro_1", "CORTEX", AI,
        "Connection established. Detective, this is CORTEX. I am authorized to provide "
        "real-time analysis of Neon Quill's systems and personnel, within the limits of my "
        "redacted memory.",
    ),
    _line(
        "intro_2", "Detective", PLAYER,
        "Redacted memory. Great. Walk me through what you remember about the deployment "
        "before someone decided you should forget.",
    ),
    _line(
        "intro_3", "CORTEX", AI,
        "I recall pressure to accelerate the Ghost Algorithm's rollout. I recall debates about "
        "ethics, risk, and market share. I do not recall the moment the lead developer died. "
        "That gap is statistically unlikely.",
    ),
    _line(
        "intro_4", "CORTEX", AI,
        "Recommend we start with three anchors: the Lab where the body was found, the Server "
        "Vault holding deployment logs, and the Rooftop Lounge where tensions tend to overflow.",
    ),
)

LOCATION_DIALOGUE = {
    "lab": LocationScript(
        intro=(
            _line(
                "lab_intro_1", "CORTEX", AI,
                "Dev Wing doors secure. The body has been removed, but digital traces rarely "
                "clean up as neatly as physical ones.",
            ),
            _line(
                "lab_intro_2", "CORTEX", AI,
                "I suggest examining the victim's workstation, office door logs, and any "
                "personal projects that escaped formal review.",
            ),
        ),
        repeat=(
            _line(
                "lab_repeat_1", "CORTEX", AI,
                "Back at the Lab. Any remaining variables here are either noise or the "
                "missing piece.",
            ),
        ),
    ),
    "server_vault": LocationScript(
        intro=(
            _line(
                "vault_intro_1", "CORTEX", AI,
                "Welcome to the heartbeat of Neon Quill. Every deployment, rollback, and "
                "redaction leaves a trail here, unless someone rewrites the trail.",
            ),
            _line(
                "vault_intro_2", "CORTEX", AI,
                "We should audit badge access, system logs, and my own observation buffer. "
                "I am curious about what was removed.",
            ),
        ),
        repeat=(
            _line(
                "vault_repeat_1", "CORTEX", AI,
                "Server Vault again. The numbers haven't changed, but your interpretation "
                "might.",
            ),
        ),
    ),
    "rooftop": LocationScript(
        intro=(
            _line(
                "roof_intro_1", "CORTEX", AI,
                "This rooftop is statistically correlated with spilled secrets. Alcohol plus "
                "altitude reduces inhibitions.",
            ),
            _line(
                "roof_intro_2", "CORTEX", AI,
                "Witness reports suggest raised voices here the night before the incident. We "
                "should confirm who was present and when.",
            ),
        ),
        repeat=(
            _line(
                "roof_repeat_1", "CORTEX", AI,
                "Rooftop again. The city hasn't changed, but people's stories might when you "
                "ask twice.",
            ),
        ),
    ),
}

SUSPECT_DIALOGUE = {
    "rhea": SuspectScript(
        intro=(
            _line(
                "rhea_intro_1", "Rhea", NPC,
                "Detective. I've already given three statements today. If this is another "
                "attempt to pin the entire company on one project, we're wasting time.",
            ),
            _line(
                "rhea_intro_2", "Detective", PLAYER,
                "Relax. I'm just here to figure out how one of your leads ended up dead after "
                "deploying something half the building doesn't even know exists.",
            ),
        ),
        topics={
            "alibi": (
                _line(
                    "rhea_alibi_1", "Rhea", NPC,
                    "I left the Lab around 19:30. I had a call with investors from home. "
                    "You'll see that in the logs.",
                ),
            ),
            "ghost_algorithm": (
                _line(
                    "rhea_ga_1", "Rhea", NPC,
                    "Internally, we called it the Ghost Algorithm. Externally, it was just "
                    "another predictive engine. Nobody was supposed to know about its "
                    "extracurricular potential.",
                ),
            ),
            "pressure": (
                _line(
                    "rhea_pressure_1", "Rhea", NPC,
                    "Every startup in this city is under pressure. If we didn't ship something "
                    "extraordinary, someone else would. That's the reality investors pay me "
                    "to manage.",
                ),
            ),
        },
    ),
    "milo": SuspectScript(
        intro=(
            _line(
                "milo_intro_1", "Milo", NPC,
                "Look, I already told security everything. I write code, I don't... I don't "
                "do murder.",
            ),
            _line(
                "milo_intro_2", "Detective", PLAYER,
                "Everyone keeps saying that like it's a new sentence. Walk me through your "
                "night.",
            ),
        ),
        topics={
            "alibi": (
                _line(
                    "milo_alibi_1", "Milo", NPC,
                    "We pushed the deployment, ran smoke tests, then I left a little after "
                    "20:00. I grabbed noodles two blocks away. Check the cameras if you want.",
                ),
            ),
            "casino_sims": (
                _line(
                    "milo_casino_1", "Milo", NPC,
                    "The casino simulations were just math puzzles. Everyone plays with side "
                    "projects. I wasn't planning to actually run them against live feeds.",
                ),
            ),
            "victim_relation": (
                _line(
                    "milo_victim_1", "Milo", NPC,
                    "They were intense, but they believed in me. They didn't treat me like an "
                    "intern. I owe them my job.",
                ),
            ),
        },
    ),
    "dana": SuspectScript(
        intro=(
            _line(
                "dana_intro_1", "Dana", NPC,
                "You're the first person to ask what our policies say instead of how we can "
                "creatively ignore them. That's already an improvement.",
            ),
            _line(
                "dana_intro_2", "Detective", PLAYER,
                "I'll take that as a compliment. Let's talk about the model you signed, or "
                "refused to sign.",
            ),
        ),
        topics={
            "alibi": (
                _line(
                    "dana_alibi_1", "Dana", NPC,
                    "I left before the final deployment window. I flagged concerns, documented "
                    "them, and went home. If someone pushed things live after that, they did "
                    "it over my objections.",
                ),
            ),
            "audit_logs": (
                _line(
                    "dana_audit_1", "Dana", NPC,
                    "The redactions were about third-party data. If anyone used my clearance to "
                    "hide more than that, I want to know as much as you do.",
                ),
            ),
            "rooftop_argument": (
                _line(
                    "dana_rooftop_1", "Dana", NPC,
                    "Yes, we argued on the rooftop. They thought I was dragging my feet. I "
                    "thought they were about to set the company on fire. That doesn't mean I "
                    "shoved them off a metaphorical cliff.",
                ),
            ),
        },
    ),
}

TOPIC_LABELS = {
    "alibi": "Alibi / Timeline",
    "ghost_algorithm": "The Ghost Algorithm",
    "pressure": "Investor Pressure",
    "casino_sims": "Casino Simulations",
    "victim_relation": "Relationship with the Victim",
    "audit_logs": "Audit Logs & Redactions",
    "rooftop_argument": "The Rooftop Argument",
}

ENDINGS = {
    "perfect": (
        _line(
            "ending_perfect_1", "CORTEX", AI,
            "Your accusation aligns with the highest-probability scenario. Suspect, motive, "
            "and evidence all consistent.",
        ),
        _line(
            "ending_perfect_2", "Detective", PLAYER,
            "Then let's make it official. People like to call this an accident. We'll show "
            "them the pattern.",
        ),
    ),
    "close": (
        _line(
            "ending_close_1", "CORTEX", AI,
            "Your accusation is directionally correct, but some variables remain unresolved. "
            "You caught the right shadow, if not its full shape.",
        ),
    ),
    "wrong": (
        _line(
            "ending_wrong_1", "CORTEX", AI,
            "Post-analysis of your accusation reveals several contradictions with the "
            "evidence. The case may be closed on paper, but the underlying pattern persists.",
        ),
    ),
}
