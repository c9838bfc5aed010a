"""
Content template selector.

Classifies a free-text message into a topic with an ordered keyword rule
table, then looks up the (mode, topic) template and quotes the message into
it. Output is a pure function of (message, mode): no randomness, no I/O.
"""

from dataclasses import dataclass

from core.domain.content import ContentMode

GENERAL_TOPIC = "general"


@dataclass(frozen=True)
class TopicRule:
    """Assigns ``topic`` when any keyword occurs in the lower-cased message."""

    topic: str
    keywords: tuple[str, ...]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


# Evaluated in order; the first matching rule wins.
TOPIC_RULES: tuple[TopicRule, ...] = (
    TopicRule("productivity", ("productivity", "tips")),
    TopicRule("cooking", ("cook", "recipe", "food")),
    TopicRule("fitness", ("fitness", "workout", "exercise")),
    TopicRule("gaming", ("gaming", "game", "stream")),
    TopicRule("business", ("business", "entrepreneur", "money")),
    TopicRule("music", ("music", "song", "artist")),
)

# Older client builds send these mode names.
MODE_ALIASES = {
    "twitch": ContentMode.STREAM,
    "clips": ContentMode.CLIP,
}

CHAT_TEMPLATES = {
    "productivity": (
        "🎯 PRODUCTIVITY HACK:\n\n\"{message}\"\n\n💡 Here's the secret: Most people waste 3+ hours daily on distractions. The solution?\n\n✅ Time-blocking technique\n✅ 25-minute focus sessions\n✅ Digital detox breaks\n\nTry this for 7 days and watch your output double! 📈\n\n#ProductivityHack #TimeManagement #Success"
    ),
    "cooking": (
        "👨‍🍳 COOKING TIP:\n\n\"{message}\"\n\n🔥 Pro chef secret: The key to restaurant-quality food is technique, not fancy ingredients!\n\n✅ Master the basics first\n✅ Use high heat for searing\n✅ Season in layers\n✅ Let meat rest after cooking\n\nYour taste buds will thank you! 😋\n\n#CookingTips #ChefLife #Foodie"
    ),
    "fitness": (
        "💪 FITNESS MOTIVATION:\n\n\"{message}\"\n\n🏋️‍♂️ Remember: You don't have to be great to start, but you have to start to be great!\n\n✅ Start with 10 minutes daily\n✅ Focus on consistency over intensity\n✅ Track your progress\n✅ Celebrate small wins\n\nYour future self is watching! 🔥\n\n#FitnessMotivation #NoExcuses #Transformation"
    ),
    "gaming": (
        "🎮 GAMING CONTENT:\n\n\"{message}\"\n\n🔥 Pro gamer tip: The difference between good and great players?\n\n✅ Map awareness\n✅ Communication skills\n✅ Consistent practice\n✅ Mental game\n\nLevel up your skills and dominate the leaderboard! 🏆\n\n#GamingTips #ProGamer #Esports"
    ),
    "business": (
        "💼 BUSINESS INSIGHT:\n\n\"{message}\"\n\n🚀 The most successful entrepreneurs focus on:\n\n✅ Solving real problems\n✅ Building relationships\n✅ Continuous learning\n✅ Taking calculated risks\n\nYour next big idea is waiting! 💡\n\n#EntrepreneurLife #BusinessTips #Success"
    ),
    "music": (
        "🎵 MUSIC DISCOVERY:\n\n\"{message}\"\n\n🎧 Hidden gem alert! Here's what you need to know:\n\n✅ Listen to the lyrics\n✅ Feel the rhythm\n✅ Discover the story behind the song\n✅ Share with friends\n\nMusic connects us all! 🎶\n\n#MusicDiscovery #NewArtist #Vibes"
    ),
    "general": (
        "✨ SMART INSIGHT:\n\n\"{message}\"\n\n💡 Here's what I think:\n\nThis topic has huge potential! The key is to:\n\n✅ Find your unique angle\n✅ Tell a compelling story\n✅ Engage your audience\n✅ Stay authentic\n\nYou've got this! 🚀\n\n#SmartContent #ViralPotential #Engagement"
    ),
}

VIDEO_SCRIPT_TEMPLATES = {
    "productivity": (
        "🎬 VIRAL PRODUCTIVITY VIDEO SCRIPT:\n\n\"{message}\"\n\n📱 HOOK (0-3s): \"I wasted 3 years doing this wrong...\"\n\n🎯 MIDDLE (3-15s): Show before/after transformation\n- Old way: Scattered, stressed, overwhelmed\n- New way: Focused, organized, productive\n\n💡 TIP: \"The 2-minute rule changed everything\"\n\n🔥 CTA (15-20s): \"Follow for more productivity hacks!\"\n\n#ProductivityHack #Viral #LifeHack"
    ),
    "cooking": (
        "🎬 VIRAL COOKING VIDEO SCRIPT:\n\n\"{message}\"\n\n👨‍🍳 HOOK (0-3s): \"Chefs don't want you to know this...\"\n\n🍳 MIDDLE (3-15s): Show cooking technique\n- Quick prep tips\n- Secret ingredients\n- Perfect timing\n\n😋 RESULT: \"Look at that perfect sear!\"\n\n🔥 CTA (15-20s): \"Save this recipe!\"\n\n#CookingHack #Foodie #Viral"
    ),
    "fitness": (
        "🎬 VIRAL FITNESS VIDEO SCRIPT:\n\n\"{message}\"\n\n💪 HOOK (0-3s): \"This 30-second exercise...\"\n\n🏋️‍♂️ MIDDLE (3-15s): Show workout\n- Proper form demonstration\n- Common mistakes to avoid\n- Results transformation\n\n🔥 CTA (15-20s): \"Try this challenge!\"\n\n#FitnessMotivation #Workout #Viral"
    ),
    "gaming": (
        "🎬 VIRAL GAMING VIDEO SCRIPT:\n\n\"{message}\"\n\n🎮 HOOK (0-3s): \"This gaming trick is OP...\"\n\n🎯 MIDDLE (3-15s): Show gameplay\n- Pro technique demonstration\n- Strategy explanation\n- Epic moments\n\n🏆 CTA (15-20s): \"Drop a like if you learned something!\"\n\n#GamingTips #ProGamer #Viral"
    ),
    "business": (
        "🎬 VIRAL BUSINESS VIDEO SCRIPT:\n\n\"{message}\"\n\n💼 HOOK (0-3s): \"This business mistake cost me $50k...\"\n\n🚀 MIDDLE (3-15s): Share lesson\n- What went wrong\n- What I learned\n- How to avoid it\n\n💡 CTA (15-20s): \"Follow for more business tips!\"\n\n#EntrepreneurLife #BusinessTips #Viral"
    ),
    "music": (
        "🎬 VIRAL MUSIC VIDEO SCRIPT:\n\n\"{message}\"\n\n🎵 HOOK (0-3s): \"This song hits different...\"\n\n🎧 MIDDLE (3-15s): Show music\n- Play the track\n- Show lyrics\n- Share the story\n\n🎶 CTA (15-20s): \"What's your favorite part?\"\n\n#MusicDiscovery #Viral #NewArtist"
    ),
    "general": (
        "🎬 VIRAL VIDEO SCRIPT:\n\n\"{message}\"\n\n🔥 HOOK (0-3s): \"You won't believe what happened...\"\n\n📱 MIDDLE (3-15s): Tell the story\n- Set up the situation\n- Build the tension\n- Deliver the payoff\n\n💯 CTA (15-20s): \"Follow for more content!\"\n\n#Viral #Trending #ContentCreation"
    ),
}

SOCIAL_TEMPLATES = {
    "productivity": (
        "🚀 PRODUCTIVITY HACK ALERT!\n\n\"{message}\"\n\n💡 Here's what changed my life:\n\n✅ Time-blocking technique\n✅ 25-minute focus sessions\n✅ Digital detox breaks\n\nI went from 2 hours of real work to 8 hours daily!\n\nTry this for 7 days and watch your output double! 📈\n\n#ProductivityHack #TimeManagement #Success #LifeHack"
    ),
    "cooking": (
        "👨‍🍳 CHEF'S SECRET REVEALED!\n\n\"{message}\"\n\n🔥 The key to restaurant-quality food:\n\n✅ Master the basics first\n✅ Use high heat for searing\n✅ Season in layers\n✅ Let meat rest after cooking\n\nYour taste buds will thank you! 😋\n\n#CookingTips #ChefLife #Foodie #CookingHack"
    ),
    "fitness": (
        "💪 FITNESS MOTIVATION!\n\n\"{message}\"\n\n🏋️‍♂️ Remember: You don't have to be great to start, but you have to start to be great!\n\n✅ Start with 10 minutes daily\n✅ Focus on consistency over intensity\n✅ Track your progress\n✅ Celebrate small wins\n\nYour future self is watching! 🔥\n\n#FitnessMotivation #NoExcuses #Transformation #Workout"
    ),
    "gaming": (
        "🎮 PRO GAMER TIP!\n\n\"{message}\"\n\n🔥 The difference between good and great players:\n\n✅ Map awareness\n✅ Communication skills\n✅ Consistent practice\n✅ Mental game\n\nLevel up your skills and dominate the leaderboard! 🏆\n\n#GamingTips #ProGamer #Esports #Gaming"
    ),
    "business": (
        "💼 ENTREPRENEUR INSIGHT!\n\n\"{message}\"\n\n🚀 The most successful entrepreneurs focus on:\n\n✅ Solving real problems\n✅ Building relationships\n✅ Continuous learning\n✅ Taking calculated risks\n\nYour next big idea is waiting! 💡\n\n#EntrepreneurLife #BusinessTips #Success #Startup"
    ),
    "music": (
        "🎵 HIDDEN GEM ALERT!\n\n\"{message}\"\n\n🎧 What you need to know:\n\n✅ Listen to the lyrics\n✅ Feel the rhythm\n✅ Discover the story behind the song\n✅ Share with friends\n\nMusic connects us all! 🎶\n\n#MusicDiscovery #NewArtist #Vibes #Music"
    ),
    "general": (
        "✨ SMART CONTENT ALERT!\n\n\"{message}\"\n\n💡 Here's what I think:\n\nThis topic has huge potential! The key is to:\n\n✅ Find your unique angle\n✅ Tell a compelling story\n✅ Engage your audience\n✅ Stay authentic\n\nYou've got this! 🚀\n\n#SmartContent #ViralPotential #Engagement #ContentCreation"
    ),
}

STREAM_TEMPLATES = {
    "productivity": (
        "🎮 PRODUCTIVITY STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Let's get productive together!\n\n✅ Working on time management\n✅ Sharing productivity hacks\n✅ Q&A about staying focused\n✅ Real-time tips and tricks\n\nChat with us and share your productivity tips! 💪\n\n#ProductivityStream #WorkFromHome #Focus #Twitch"
    ),
    "cooking": (
        "👨‍🍳 COOKING STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Cooking up something delicious!\n\n✅ Making a new recipe\n✅ Sharing cooking tips\n✅ Q&A about techniques\n✅ Taste testing with chat\n\nJoin us in the kitchen! 🍳\n\n#CookingStream #ChefLife #Foodie #Twitch"
    ),
    "fitness": (
        "💪 FITNESS STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Let's get fit together!\n\n✅ Working out live\n✅ Sharing fitness tips\n✅ Q&A about training\n✅ Motivation and support\n\nLet's crush our goals! 🏋️‍♂️\n\n#FitnessStream #Workout #Motivation #Twitch"
    ),
    "gaming": (
        "🎮 GAMING STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Epic gaming session!\n\n✅ Playing your favorite games\n✅ Sharing pro tips\n✅ Q&A about strategies\n✅ Interactive gameplay\n\nJoin the fun and let's dominate together! 🎮\n\n#GamingStream #ProGamer #Esports #Twitch"
    ),
    "business": (
        "💼 BUSINESS STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Entrepreneur insights!\n\n✅ Sharing business tips\n✅ Q&A about startups\n✅ Real-time advice\n✅ Success stories\n\nLet's build something amazing! 🚀\n\n#BusinessStream #Entrepreneur #Startup #Twitch"
    ),
    "music": (
        "🎵 MUSIC STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Music discovery session!\n\n✅ Playing new tracks\n✅ Sharing music insights\n✅ Q&A about artists\n✅ Interactive playlist\n\nLet's discover amazing music! 🎶\n\n#MusicStream #MusicDiscovery #Vibes #Twitch"
    ),
    "general": (
        "🎮 LIVE STREAM!\n\n\"{message}\"\n\n🔥 LIVE NOW: Let's hang out!\n\n✅ Interactive content\n✅ Q&A with chat\n✅ Fun and games\n✅ Community building\n\nJoin the conversation! 💬\n\n#LiveStream #Community #Fun #Twitch"
    ),
}

CLIP_TEMPLATES = {
    "productivity": (
        "✂️ VIRAL PRODUCTIVITY CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"I wasted 3 years doing this wrong...\"\n\nCONTENT (3-15s): Show before/after transformation\n- Old way: Scattered and stressed\n- New way: Focused and productive\n\nTIP: \"The 2-minute rule changed everything\"\n\nCTA (15-20s): \"Follow for more hacks!\"\n\n#ProductivityHack #ViralClip #LifeHack #Shorts"
    ),
    "cooking": (
        "✂️ VIRAL COOKING CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"Chefs don't want you to know this...\"\n\nCONTENT (3-15s): Show cooking technique\n- Quick prep tips\n- Secret ingredients\n- Perfect timing\n\nRESULT: \"Look at that perfect sear!\"\n\nCTA (15-20s): \"Save this recipe!\"\n\n#CookingHack #ViralClip #Foodie #Shorts"
    ),
    "fitness": (
        "✂️ VIRAL FITNESS CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"This 30-second exercise...\"\n\nCONTENT (3-15s): Show workout\n- Proper form demonstration\n- Common mistakes to avoid\n- Results transformation\n\nCTA (15-20s): \"Try this challenge!\"\n\n#FitnessMotivation #ViralClip #Workout #Shorts"
    ),
    "gaming": (
        "✂️ VIRAL GAMING CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"This gaming trick is OP...\"\n\nCONTENT (3-15s): Show gameplay\n- Pro technique demonstration\n- Strategy explanation\n- Epic moments\n\nCTA (15-20s): \"Drop a like if you learned something!\"\n\n#GamingTips #ViralClip #ProGamer #Shorts"
    ),
    "business": (
        "✂️ VIRAL BUSINESS CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"This business mistake cost me $50k...\"\n\nCONTENT (3-15s): Share lesson\n- What went wrong\n- What I learned\n- How to avoid it\n\nCTA (15-20s): \"Follow for more business tips!\"\n\n#EntrepreneurLife #ViralClip #BusinessTips #Shorts"
    ),
    "music": (
        "✂️ VIRAL MUSIC CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"This song hits different...\"\n\nCONTENT (3-15s): Show music\n- Play the track\n- Show lyrics\n- Share the story\n\nCTA (15-20s): \"What's your favorite part?\"\n\n#MusicDiscovery #ViralClip #NewArtist #Shorts"
    ),
    "general": (
        "✂️ VIRAL CLIP!\n\n\"{message}\"\n\n🎬 CLIP SCRIPT:\n\nHOOK (0-3s): \"You won't believe what happened...\"\n\nCONTENT (3-15s): Tell the story\n- Set up the situation\n- Build the tension\n- Deliver the payoff\n\nCTA (15-20s): \"Follow for more content!\"\n\n#ViralClip #Trending #ContentCreation #Shorts"
    ),
}

TEXT_TEMPLATES = {
    ContentMode.CHAT: CHAT_TEMPLATES,
    ContentMode.VIDEO: VIDEO_SCRIPT_TEMPLATES,
    ContentMode.SOCIAL: SOCIAL_TEMPLATES,
    ContentMode.STREAM: STREAM_TEMPLATES,
    ContentMode.CLIP: CLIP_TEMPLATES,
}

# The video-script endpoint only distinguishes live streams and clips.
SCRIPT_TEMPLATES = {
    ContentMode.CHAT: VIDEO_SCRIPT_TEMPLATES,
    ContentMode.VIDEO: VIDEO_SCRIPT_TEMPLATES,
    ContentMode.SOCIAL: VIDEO_SCRIPT_TEMPLATES,
    ContentMode.STREAM: STREAM_TEMPLATES,
    ContentMode.CLIP: CLIP_TEMPLATES,
}


def normalize_mode(mode: str | None) -> ContentMode:
    """Resolve a requested mode, falling back to chat for anything unknown."""
    if not mode:
        return ContentMode.CHAT
    key = mode.strip().lower()
    if key in MODE_ALIASES:
        return MODE_ALIASES[key]
    try:
        return ContentMode(key)
    except ValueError:
        return ContentMode.CHAT


def classify_topic(message: str) -> str:
    lowered = (message or "").lower()
    for rule in TOPIC_RULES:
        if rule.matches(lowered):
            return rule.topic
    return GENERAL_TOPIC


def _render(table: dict[str, str], topic: str, message: str) -> str:
    template = table.get(topic, table[GENERAL_TOPIC])
    return template.format(message=message)


def select_content(message: str, mode: str | None = None) -> str:
    """
    Generate post text for a message in the given mode.

    Args:
        message: Free-text prompt from the user
        mode: One of chat, video, social, stream, clip (aliases twitch, clips)

    Returns:
        The topic template for the mode with the message quoted in it
    """
    return _render(TEXT_TEMPLATES[normalize_mode(mode)], classify_topic(message), message)


def select_video_script(message: str, mode: str | None = None) -> str:
    """Generate a short-form video script for a message."""
    return _render(SCRIPT_TEMPLATES[normalize_mode(mode)], classify_topic(message), message)
