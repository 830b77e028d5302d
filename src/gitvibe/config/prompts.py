"""Default prompt templates shipped with new configuration profiles."""

from textwrap import dedent

_RESULTS_SCHEMA = dedent("""\
	{
	  "type": "object",
	  "properties": {
	    "results": {
	      "type": "array",
	      "items": {
	        "type": "string"
	      },
	      "minItems": 1
	    }
	  },
	  "required": ["results"],
	  "additionalProperties": false
	}""")

DEFAULT_COMMIT_PROMPT = (
	dedent("""\
	Analyze the following git changes and generate {n_commit} complete conventional commit message(s).
	GIT DIFF:
	{diff}

	TASK: Write conventional commit messages that accurately describe what was changed.

	REQUIREMENTS:
	- Format: type: subject (NO scope, just type and subject)
	- Be specific and descriptive
	- Use imperative mood, present tense
	- Include the main component/area affected
	- Complete the message - never truncate mid-sentence

	COMMIT TYPE GUIDELINES:
	- feat: NEW user-facing features only
	- refactor: code improvements, restructuring, internal changes
	- fix: bug fixes that resolve issues
	- docs: documentation changes only
	- chore: config updates, maintenance, dependencies

	EXAMPLES:
	- feat: add user login with OAuth integration
	- fix: resolve memory leak in image processing service
	- docs: update installation and configuration guide
	- chore: update axios to v1.6.0 for security patches

	Return exactly {n_commit} commit message(s) as JSON matching this schema, with no other text:

	""")
	+ _RESULTS_SCHEMA
	+ "\n"
)

DEFAULT_MERGE_COMMIT_PROMPT = (
	dedent("""\
	You have been given multiple commit messages generated from different chunks of a large git diff.
	Merge them into cohesive conventional commit messages that accurately reflect all the changes
	described in the individual messages.

	INPUT (COMMIT MESSAGES FROM CHUNKS):
	{messages}

	TASK: Create {n_commit} variation(s) of a conventional commit message that covers all of the
	changes above.

	REQUIREMENTS:
	- Format: type: subject (NO scope, just type and subject)
	- Be comprehensive but concise
	- Use imperative mood, present tense
	- Complete the message - never truncate mid-sentence

	IMPORTANT:
	Return only JSON matching this schema. No markdown formatting, no explanations:

	""")
	+ _RESULTS_SCHEMA
	+ "\n"
)

DEFAULT_PR_PROMPT = dedent("""\
	Analyze the following commits and generate a comprehensive PR title and description.

	COMMITS:
	{commits}

	TASK: Create a PR title and description that summarizes the changes.

	REQUIREMENTS:
	- Title: Concise, descriptive, follows conventional format (type: description)
	- Description: Detailed explanation of changes, impact, and any breaking changes
	- Format as:
	# Title

	Description

	Include:
	- What was changed
	- Why it was changed
	- How it affects users/developers
	- Any breaking changes or migration notes

	Return only the formatted PR content, no additional explanations.
	""")

DEFAULT_PR_CHUNK_PROMPT = dedent("""\
	Summarize the changes in this portion of a set of commits:

	{diff}

	Provide a concise summary of what this chunk of changes does. Focus on the key modifications,
	additions, or deletions.
	""")

DEFAULT_MERGE_PR_PROMPT = dedent("""\
	Based on the following summaries of different parts of a set of commits, create one
	comprehensive pull request title and description.

	SUMMARIES:
	{messages}

	Create a cohesive PR that covers all the changes mentioned in the summaries.
	Format as:
	# Title

	Description

	Return only the formatted PR content, no additional explanations.
	""")
